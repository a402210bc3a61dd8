"""Result types returned by application services, and the edit-session snapshot."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

from contactavatar.domain import Contact


@dataclass(frozen=True)
class Loaded:
    contact: Contact


@dataclass(frozen=True)
class NotFound:
    contact_id: int


@dataclass(frozen=True)
class LoadFailed:
    contact_id: int
    message: str


LoadResult = Loaded | NotFound | LoadFailed


class SaveFailureKind(Enum):
    FORM_INVALID = "form_invalid"
    STORE_FAILURE = "store_failure"
    SESSION_CLOSED = "session_closed"


@dataclass(frozen=True)
class SaveSucceeded:
    contact_id: int


@dataclass(frozen=True)
class SaveFailed:
    kind: SaveFailureKind
    message: str


SaveResult = SaveSucceeded | SaveFailed


@dataclass(frozen=True)
class DeleteSucceeded:
    contact_id: int


@dataclass(frozen=True)
class DeleteFailed:
    message: str


DeleteResult = DeleteSucceeded | DeleteFailed


@dataclass(frozen=True)
class AvatarSelection:
    ref: int | None = None
    locator: str | None = None


class EditSessionSnapshot(BaseModel):
    """Form state the host persists across process or view restarts."""

    model_config = ConfigDict(frozen=True)

    contact_id: int = 0
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    date_of_birth: int | None = None
    avatar_ref: int | None = None
    avatar_locator: str | None = None
    dirty: bool = False
