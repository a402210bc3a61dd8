"""Domain entities: Contact and SortOrder, plus the bundled avatar catalogue."""

import time
from dataclasses import dataclass, field
from enum import Enum

NAME_MAX_LENGTH = 100

# Bundled avatars shipped with the app. The first one doubles as the default sentinel.
DEFAULT_AVATAR_REF = 1
BUILTIN_AVATAR_REFS: tuple[int, ...] = tuple(range(DEFAULT_AVATAR_REF, DEFAULT_AVATAR_REF + 11))


def now_millis() -> int:
    return int(time.time() * 1000)


class SortOrder(Enum):
    """Ordering of the contact list. Persisted by member name."""

    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    RECENTLY_ADDED = "recently_added"

    @classmethod
    def from_name(cls, value: str | None) -> "SortOrder":
        """Parse a stored name; unknown or missing values fall back to NAME_ASC."""
        if not value:
            return cls.NAME_ASC
        try:
            return cls[value.strip()]
        except KeyError:
            return cls.NAME_ASC


@dataclass(frozen=True)
class Contact:
    """
    A person in the local contact book.
    id == 0 means the record has not been persisted yet; the store assigns the real id.
    At most one of avatar_ref / avatar_locator is meaningful at a time.
    """

    id: int = 0
    name: str = ""
    phone: str = ""
    email: str | None = None
    address: str | None = None
    date_of_birth: int | None = None
    avatar_ref: int | None = None
    avatar_locator: str | None = None
    created_at: int = field(default_factory=now_millis)

    def __post_init__(self):
        if self.id < 0:
            raise ValueError("Contact id must be zero (unsaved) or positive.")

    @property
    def is_persisted(self) -> bool:
        return self.id > 0

    def has_custom_avatar(self) -> bool:
        return self.avatar_ref is not None or self.avatar_locator is not None

    def display_avatar_ref(self) -> int:
        """Built-in avatar to draw when no locator is shown; never None."""
        if self.avatar_ref is None:
            return DEFAULT_AVATAR_REF
        return self.avatar_ref
