"""Contact writes with avatar fix-up; reads pass straight through to the store."""

import asyncio
import logging

from contactavatar.application.avatar_resolver import AvatarResolver
from contactavatar.application.ports import ContactStore, LiveContacts
from contactavatar.domain import BUILTIN_AVATAR_REFS, Contact

logger = logging.getLogger(__name__)


class ContactRepository:
    """Single funnel for contact mutations. No caching: every call round-trips the store."""

    def __init__(self, store: ContactStore, resolver: AvatarResolver) -> None:
        self._store = store
        self._resolver = resolver

    async def insert(self, contact: Contact) -> int:
        resolved = await self._resolve(contact)
        contact_id = await self._store.insert(resolved)
        logger.debug("Inserted contact %s", contact_id)
        return contact_id

    async def update(self, contact: Contact) -> None:
        resolved = await self._resolve(contact)
        await self._store.update(resolved)
        logger.debug("Updated contact %s", contact.id)

    async def delete(self, contact: Contact) -> None:
        await self._store.delete(contact)

    async def delete_all(self) -> None:
        await self._store.delete_all()

    async def get_by_id(self, contact_id: int) -> Contact | None:
        return await self._store.get_by_id(contact_id)

    async def count(self) -> int:
        return await self._store.count()

    def observe_all(self) -> LiveContacts:
        return self._store.observe_all()

    def observe_search(self, query: str) -> LiveContacts:
        return self._store.observe_search(query)

    def available_avatars(self) -> tuple[int, ...]:
        return BUILTIN_AVATAR_REFS

    async def _resolve(self, contact: Contact) -> Contact:
        # Locator probes may open files; keep them off the event loop.
        return await asyncio.to_thread(self._resolver.resolve, contact)
