"""In-memory implementation of ContactStore (no DB)."""

import dataclasses

from contactavatar.domain import Contact
from contactavatar.infrastructure.live_query import ChangeNotifier, LiveQuery


def _by_name(contacts) -> list[Contact]:
    return sorted(contacts, key=lambda c: (c.name, c.id))


class InMemoryContactStore:
    """Stores contacts in a dict keyed by id. Ids start at 1 and are never reused."""

    def __init__(self) -> None:
        self._by_id: dict[int, Contact] = {}
        self._next_id = 1
        self._notifier = ChangeNotifier()

    async def insert(self, contact: Contact) -> int:
        if contact.id == 0:
            contact_id = self._next_id
            self._next_id += 1
        else:
            contact_id = contact.id
            self._next_id = max(self._next_id, contact_id + 1)
        self._by_id[contact_id] = dataclasses.replace(contact, id=contact_id)
        self._notifier.notify()
        return contact_id

    async def update(self, contact: Contact) -> None:
        existing = self._by_id.get(contact.id)
        if existing is None:
            return
        self._by_id[contact.id] = dataclasses.replace(contact, created_at=existing.created_at)
        self._notifier.notify()

    async def delete(self, contact: Contact) -> None:
        if self._by_id.pop(contact.id, None) is not None:
            self._notifier.notify()

    async def delete_all(self) -> None:
        self._by_id.clear()
        self._notifier.notify()

    async def get_by_id(self, contact_id: int) -> Contact | None:
        return self._by_id.get(contact_id)

    async def count(self) -> int:
        return len(self._by_id)

    def observe_all(self) -> LiveQuery:
        async def fetch() -> list[Contact]:
            return _by_name(self._by_id.values())

        return LiveQuery(fetch, self._notifier, description="all")

    def observe_search(self, query: str) -> LiveQuery:
        needle = (query or "").lower()

        async def fetch() -> list[Contact]:
            return _by_name(
                c
                for c in self._by_id.values()
                if needle in c.name.lower() or needle in c.phone.lower()
            )

        return LiveQuery(fetch, self._notifier, description=f"search:{query}")
