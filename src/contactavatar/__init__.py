"""
contactavatar core: clean-architecture layout.

- domain: Contact, SortOrder, field validation. No outer dependencies.
- application: repository, list query engine, edit session, details, ports, DTOs.
- infrastructure: adapters (InMemoryContactStore, Neo4jContactStore, preference stores, avatar probes).
"""

from contactavatar.application import (
    AvatarResolver,
    ContactDetails,
    ContactRepository,
    EditSession,
    EditSessionSnapshot,
    ListQueryEngine,
    SaveFailed,
    SaveFailureKind,
    SaveSucceeded,
    StoreError,
)
from contactavatar.bootstrap import ContactBook, create_contact_book
from contactavatar.config import Settings
from contactavatar.domain import DEFAULT_AVATAR_REF, Contact, SortOrder
from contactavatar.infrastructure import (
    InMemoryContactStore,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    LocalAvatarCapabilities,
    Neo4jContactStore,
)

__all__ = [
    "AvatarResolver",
    "Contact",
    "ContactBook",
    "ContactDetails",
    "ContactRepository",
    "DEFAULT_AVATAR_REF",
    "EditSession",
    "EditSessionSnapshot",
    "InMemoryContactStore",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "ListQueryEngine",
    "LocalAvatarCapabilities",
    "Neo4jContactStore",
    "SaveFailed",
    "SaveFailureKind",
    "SaveSucceeded",
    "Settings",
    "SortOrder",
    "StoreError",
    "create_contact_book",
]
