"""Infrastructure layer: concrete implementations of application ports."""

from contactavatar.infrastructure.avatars import LocalAvatarCapabilities
from contactavatar.infrastructure.live_query import ChangeNotifier, LiveQuery
from contactavatar.infrastructure.memory_store import InMemoryContactStore
from contactavatar.infrastructure.persistence.neo4j_store import (
    Neo4jContactStore,
    ensure_contact_constraint,
)
from contactavatar.infrastructure.preferences import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
)

__all__ = [
    "ChangeNotifier",
    "InMemoryContactStore",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "LiveQuery",
    "LocalAvatarCapabilities",
    "Neo4jContactStore",
    "ensure_contact_constraint",
]
