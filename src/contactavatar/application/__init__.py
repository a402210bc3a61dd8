"""Application layer: services, ports, and DTOs. Depends only on domain."""

from contactavatar.application.avatar_picker import AvatarPicker
from contactavatar.application.avatar_resolver import AvatarDisplay, AvatarResolver, effective_avatar
from contactavatar.application.contact_details import ContactDetails
from contactavatar.application.contact_repository import ContactRepository
from contactavatar.application.dto import (
    AvatarSelection,
    DeleteFailed,
    DeleteSucceeded,
    EditSessionSnapshot,
    Loaded,
    LoadFailed,
    NotFound,
    SaveFailed,
    SaveFailureKind,
    SaveSucceeded,
)
from contactavatar.application.edit_session import EditSession
from contactavatar.application.errors import ErrorKind, HandledError, Severity, handle_error
from contactavatar.application.list_query import ListQueryEngine, sort_contacts
from contactavatar.application.ports import (
    AvatarCapabilities,
    ContactStore,
    LiveContacts,
    PreferenceStore,
    StoreError,
    Subscription,
)

__all__ = [
    "AvatarCapabilities",
    "AvatarDisplay",
    "AvatarPicker",
    "AvatarResolver",
    "AvatarSelection",
    "ContactDetails",
    "ContactRepository",
    "ContactStore",
    "DeleteFailed",
    "DeleteSucceeded",
    "EditSession",
    "EditSessionSnapshot",
    "ErrorKind",
    "HandledError",
    "ListQueryEngine",
    "LiveContacts",
    "LoadFailed",
    "Loaded",
    "NotFound",
    "PreferenceStore",
    "SaveFailed",
    "SaveFailureKind",
    "SaveSucceeded",
    "Severity",
    "StoreError",
    "Subscription",
    "effective_avatar",
    "handle_error",
    "sort_contacts",
]
