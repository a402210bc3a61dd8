"""Single-contact view: load by id and delete with a typed result."""

import logging

from contactavatar.application.contact_repository import ContactRepository
from contactavatar.application.dto import DeleteFailed, DeleteResult, DeleteSucceeded
from contactavatar.application.errors import handle_error
from contactavatar.domain import Contact

logger = logging.getLogger(__name__)


class ContactDetails:
    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository
        self._contact: Contact | None = None
        self._deleting = False

    @property
    def contact(self) -> Contact | None:
        return self._contact

    @property
    def is_deleting(self) -> bool:
        return self._deleting

    async def load(self, contact_id: int) -> Contact | None:
        """Return the contact, or None when it is missing or the store fails."""
        try:
            self._contact = await self._repo.get_by_id(contact_id)
        except Exception as e:
            handle_error(e)
            self._contact = None
        return self._contact

    async def delete(self) -> DeleteResult:
        contact = self._contact
        if contact is None:
            return DeleteFailed(message="No contact loaded.")
        self._deleting = True
        try:
            await self._repo.delete(contact)
        except Exception as e:
            handled = handle_error(e)
            return DeleteFailed(message=handled.user_message)
        finally:
            self._deleting = False
        logger.info("Deleted contact %s", contact.id)
        self._contact = None
        return DeleteSucceeded(contact_id=contact.id)
