"""Test doubles shared across test modules."""

from contactavatar.application import StoreError
from contactavatar.domain import BUILTIN_AVATAR_REFS
from contactavatar.infrastructure import InMemoryContactStore

READABLE_LOCATOR = "file:///avatars/alice.png"


class FakeCapabilities:
    """Avatar probes backed by plain sets; records what was probed."""

    def __init__(self, refs=BUILTIN_AVATAR_REFS, locators=(READABLE_LOCATOR,)) -> None:
        self.refs = set(refs)
        self.locators = set(locators)
        self.probed: list = []

    def resource_exists(self, ref: int) -> bool:
        self.probed.append(ref)
        return ref in self.refs

    def locator_accessible(self, locator: str) -> bool:
        self.probed.append(locator)
        return locator in self.locators


class FailingStore(InMemoryContactStore):
    """In-memory store whose writes (and optionally reads) raise StoreError."""

    def __init__(self, *, fail_reads: bool = False) -> None:
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = True

    async def insert(self, contact):
        if self.fail_writes:
            raise StoreError("disk full")
        return await super().insert(contact)

    async def update(self, contact):
        if self.fail_writes:
            raise StoreError("disk full")
        await super().update(contact)

    async def delete(self, contact):
        if self.fail_writes:
            raise StoreError("disk full")
        await super().delete(contact)

    async def get_by_id(self, contact_id):
        if self.fail_reads:
            raise StoreError("connection lost")
        return await super().get_by_id(contact_id)
