"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Callable
from typing import Protocol

from contactavatar.domain import Contact

ContactsListener = Callable[[list[Contact]], None]


class StoreError(Exception):
    """A ContactStore backend failed to read or write."""


class Subscription(Protocol):
    def unsubscribe(self) -> None:
        """Stop receiving emissions. Calling it twice is harmless."""
        ...


class LiveContacts(Protocol):
    """A query that re-emits its full result list after every store write."""

    def subscribe(self, listener: ContactsListener) -> Subscription:
        """Register a listener; it receives the current snapshot first."""
        ...


class ContactStore(Protocol):
    """Persistence boundary for contacts. Single writer, last write wins."""

    async def insert(self, contact: Contact) -> int:
        """Store a contact and return its id. id == 0 assigns a new id; an existing id is replaced."""
        ...

    async def update(self, contact: Contact) -> None:
        """Replace the whole record with the same id. Unknown ids are ignored."""
        ...

    async def delete(self, contact: Contact) -> None:
        ...

    async def delete_all(self) -> None:
        ...

    async def get_by_id(self, contact_id: int) -> Contact | None:
        """Return the contact with the given id, or None."""
        ...

    async def count(self) -> int:
        ...

    def observe_all(self) -> LiveContacts:
        """All contacts ordered by name ascending."""
        ...

    def observe_search(self, query: str) -> LiveContacts:
        """Contacts whose name or phone contains query, case-insensitive, ordered by name."""
        ...


class PreferenceStore(Protocol):
    """Small key/value store for user settings."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class AvatarCapabilities(Protocol):
    """Read-only probes supplied by the host to check whether an avatar can be rendered."""

    def resource_exists(self, ref: int) -> bool:
        ...

    def locator_accessible(self, locator: str) -> bool:
        """Attempt-read semantics: True only if the image can actually be opened."""
        ...
