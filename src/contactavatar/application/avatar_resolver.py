"""Reconcile a contact's two avatar fields with what the host can actually render."""

import dataclasses
import logging
from dataclasses import dataclass

from contactavatar.application.ports import AvatarCapabilities
from contactavatar.domain import DEFAULT_AVATAR_REF, Contact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvatarDisplay:
    """What to draw for a contact: an external locator or a built-in reference."""

    locator: str | None = None
    ref: int | None = None

    @property
    def is_locator(self) -> bool:
        return self.locator is not None


def effective_avatar(contact: Contact, default_ref: int = DEFAULT_AVATAR_REF) -> AvatarDisplay:
    """Display precedence: locator, then built-in reference, then the default sentinel."""
    if contact.avatar_locator is not None:
        return AvatarDisplay(locator=contact.avatar_locator)
    if contact.avatar_ref is not None:
        return AvatarDisplay(ref=contact.avatar_ref)
    return AvatarDisplay(ref=default_ref)


class AvatarResolver:
    """Fixes up avatar fields before a write. Unusable avatars fall back to the default sentinel."""

    def __init__(
        self,
        capabilities: AvatarCapabilities,
        *,
        default_ref: int = DEFAULT_AVATAR_REF,
    ) -> None:
        self._capabilities = capabilities
        self._default_ref = default_ref

    @property
    def default_ref(self) -> int:
        return self._default_ref

    def resolve(self, contact: Contact) -> Contact:
        """Return contact with consistent avatar fields; the same object when nothing changes."""
        avatar_ref = contact.avatar_ref
        avatar_locator = contact.avatar_locator

        if avatar_ref is not None and not self._capabilities.resource_exists(avatar_ref):
            logger.info("Avatar ref %s not found for contact %s, using default", avatar_ref, contact.id)
            avatar_ref = self._default_ref

        if avatar_locator is not None and not self._capabilities.locator_accessible(avatar_locator):
            logger.info("Avatar locator no longer readable for contact %s, using default", contact.id)
            avatar_locator = None
            avatar_ref = self._default_ref

        if avatar_ref == contact.avatar_ref and avatar_locator == contact.avatar_locator:
            return contact
        return dataclasses.replace(contact, avatar_ref=avatar_ref, avatar_locator=avatar_locator)
