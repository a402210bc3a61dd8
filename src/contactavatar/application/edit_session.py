"""Create/edit form state: field values, per-field validation, dirty tracking and save.

Lifecycle (xstate machine):
    empty --LOAD_SUCCEEDED--> loaded
    empty | loaded --FIELD_CHANGED--> editing
    empty | loaded | editing --SAVE_SUCCEEDED--> saved
    empty | loaded | editing --DISCARD--> discarded
saved and discarded are terminal: later field updates and late results of
in-flight loads/saves leave the session untouched.
"""

import asyncio
import dataclasses
import logging
from typing import Any

from xstate.machine import Machine

from contactavatar.application.contact_repository import ContactRepository
from contactavatar.application.dto import (
    AvatarSelection,
    EditSessionSnapshot,
    Loaded,
    LoadFailed,
    LoadResult,
    NotFound,
    SaveFailed,
    SaveFailureKind,
    SaveResult,
    SaveSucceeded,
)
from contactavatar.application.errors import handle_error
from contactavatar.domain import (
    SUCCESS,
    Contact,
    ValidationResult,
    is_form_valid,
    validate_email,
    validate_name,
    validate_phone,
)

logger = logging.getLogger(__name__)

EDIT_SESSION_MACHINE = {
    "id": "edit_session",
    "initial": "empty",
    "states": {
        "empty": {
            "on": {
                "LOAD_SUCCEEDED": "loaded",
                "FIELD_CHANGED": "editing",
                "SAVE_SUCCEEDED": "saved",
                "DISCARD": "discarded",
            }
        },
        "loaded": {
            "on": {
                "FIELD_CHANGED": "editing",
                "SAVE_SUCCEEDED": "saved",
                "DISCARD": "discarded",
            }
        },
        "editing": {
            "on": {
                "SAVE_SUCCEEDED": "saved",
                "DISCARD": "discarded",
            }
        },
        "saved": {"on": {}},
        "discarded": {"on": {}},
    },
}

TERMINAL_STATES = frozenset({"saved", "discarded"})
FIELDS = ("name", "phone", "email", "address", "date_of_birth", "avatar")

_machine = Machine(EDIT_SESSION_MACHINE)


def transition(state_value: str, event: str) -> str | None:
    """Return the next state for (state_value, event), or None if the event is not handled there."""
    try:
        state = _machine.state_from(state_value)
        next_state = _machine.transition(state, event)
    except (ValueError, KeyError):
        return None
    if next_state.value == state_value:
        return None
    return next_state.value


def _optional(value: str) -> str | None:
    value = (value or "").strip()
    return value or None


class EditSession:
    """One create or edit form. A new session edits a new contact until load_contact() succeeds."""

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository
        self._state: str = EDIT_SESSION_MACHINE["initial"]
        self._contact_id = 0
        self._original: Contact | None = None
        self._name = ""
        self._phone = ""
        self._email = ""
        self._address = ""
        self._date_of_birth: int | None = None
        self._avatar_ref: int | None = None
        self._avatar_locator: str | None = None
        self._name_result: ValidationResult = SUCCESS
        self._phone_result: ValidationResult = SUCCESS
        self._email_result: ValidationResult = SUCCESS
        self._save_enabled = False
        self._dirty = False
        self._saved_id: int | None = None
        self._save_lock = asyncio.Lock()

    # -- read-only view -------------------------------------------------

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def original(self) -> Contact | None:
        return self._original

    @property
    def name(self) -> str:
        return self._name

    @property
    def phone(self) -> str:
        return self._phone

    @property
    def email(self) -> str:
        return self._email

    @property
    def address(self) -> str:
        return self._address

    @property
    def date_of_birth(self) -> int | None:
        return self._date_of_birth

    @property
    def avatar(self) -> AvatarSelection:
        return AvatarSelection(ref=self._avatar_ref, locator=self._avatar_locator)

    @property
    def name_result(self) -> ValidationResult:
        return self._name_result

    @property
    def phone_result(self) -> ValidationResult:
        return self._phone_result

    @property
    def email_result(self) -> ValidationResult:
        return self._email_result

    @property
    def save_enabled(self) -> bool:
        return self._save_enabled

    @property
    def dirty(self) -> bool:
        return self._dirty

    # -- operations -----------------------------------------------------

    async def load_contact(self, contact_id: int, *, seed_fields: bool = True) -> LoadResult:
        """Fetch an existing contact and make it the original for dirty comparison."""
        if contact_id <= 0:
            return NotFound(contact_id=contact_id)
        try:
            contact = await self._repo.get_by_id(contact_id)
        except Exception as e:
            handled = handle_error(e)
            return LoadFailed(contact_id=contact_id, message=handled.user_message)
        if contact is None:
            return NotFound(contact_id=contact_id)
        if self.is_closed:
            logger.debug("Edit session closed before contact %s loaded", contact_id)
            return Loaded(contact=contact)

        self._contact_id = contact_id
        self._original = contact
        if seed_fields:
            self._name = contact.name
            self._phone = contact.phone
            self._email = contact.email or ""
            self._address = contact.address or ""
            self._date_of_birth = contact.date_of_birth
            self._avatar_ref = contact.avatar_ref
            self._avatar_locator = contact.avatar_locator
        self._validate_all()
        self._refresh_dirty()
        self._fire("LOAD_SUCCEEDED")
        return Loaded(contact=contact)

    def update_field(self, field: str, value: Any) -> None:
        """Set one field. For "avatar" pass an AvatarSelection, a (ref, locator) pair, or None."""
        if field not in FIELDS:
            raise ValueError(f"Unknown contact field: {field!r}")
        if self.is_closed:
            logger.debug("Ignoring %s update on closed edit session", field)
            return

        if field == "name":
            self._name = value or ""
            self._name_result = validate_name(self._name)
        elif field == "phone":
            self._phone = value or ""
            self._phone_result = validate_phone(self._phone)
        elif field == "email":
            self._email = value or ""
            self._email_result = validate_email(self._email)
        elif field == "address":
            self._address = value or ""
        elif field == "date_of_birth":
            self._date_of_birth = value
        else:
            if value is None:
                self._avatar_ref, self._avatar_locator = None, None
            elif isinstance(value, AvatarSelection):
                self._avatar_ref, self._avatar_locator = value.ref, value.locator
            else:
                self._avatar_ref, self._avatar_locator = value

        self._save_enabled = is_form_valid(
            validate_name(self._name),
            validate_phone(self._phone),
            validate_email(self._email),
        )
        self._refresh_dirty()
        self._fire("FIELD_CHANGED")

    async def save(self) -> SaveResult:
        """Validate, then insert or update. Never raises; failures come back as SaveFailed."""
        async with self._save_lock:
            if self._state == "saved":
                return SaveSucceeded(contact_id=self._saved_id)
            if self._state == "discarded":
                return SaveFailed(
                    kind=SaveFailureKind.SESSION_CLOSED,
                    message="This edit session has been closed.",
                )

            self._validate_all()
            if not self._save_enabled:
                return SaveFailed(
                    kind=SaveFailureKind.FORM_INVALID,
                    message="Please fix the highlighted fields.",
                )

            contact = self._build_contact()
            try:
                if self._original is not None:
                    await self._repo.update(contact)
                    contact_id = self._original.id
                else:
                    contact_id = await self._repo.insert(contact)
            except Exception as e:
                handled = handle_error(e)
                return SaveFailed(kind=SaveFailureKind.STORE_FAILURE, message=handled.user_message)

            if self.is_closed:
                return SaveSucceeded(contact_id=contact_id)
            self._saved_id = contact_id
            self._dirty = False
            self._fire("SAVE_SUCCEEDED")
            logger.info("Saved contact %s", contact_id)
            return SaveSucceeded(contact_id=contact_id)

    def discard(self) -> None:
        """Tear the session down; in-flight work will no longer touch it."""
        self._fire("DISCARD")

    def snapshot(self) -> EditSessionSnapshot:
        return EditSessionSnapshot(
            contact_id=self._contact_id,
            name=self._name,
            phone=self._phone,
            email=self._email,
            address=self._address,
            date_of_birth=self._date_of_birth,
            avatar_ref=self._avatar_ref,
            avatar_locator=self._avatar_locator,
            dirty=self._dirty,
        )

    async def restore(self, snapshot: EditSessionSnapshot) -> LoadResult | None:
        """Reapply a snapshot; reload the original record without overwriting restored fields."""
        if self.is_closed:
            return None
        self._name = snapshot.name
        self._phone = snapshot.phone
        self._email = snapshot.email
        self._address = snapshot.address
        self._date_of_birth = snapshot.date_of_birth
        self._avatar_ref = snapshot.avatar_ref
        self._avatar_locator = snapshot.avatar_locator
        self._dirty = snapshot.dirty
        if self._name or self._phone:
            self._validate_all()
        if snapshot.dirty:
            self._fire("FIELD_CHANGED")
        if snapshot.contact_id > 0:
            return await self.load_contact(snapshot.contact_id, seed_fields=False)
        return None

    # -- internals ------------------------------------------------------

    def _fire(self, event: str) -> None:
        next_state = transition(self._state, event)
        if next_state is not None:
            logger.debug("Edit session %s -> %s on %s", self._state, next_state, event)
            self._state = next_state

    def _validate_all(self) -> None:
        self._name_result = validate_name(self._name)
        self._phone_result = validate_phone(self._phone)
        self._email_result = validate_email(self._email)
        self._save_enabled = is_form_valid(self._name_result, self._phone_result, self._email_result)

    def _refresh_dirty(self) -> None:
        original = self._original
        if original is not None:
            self._dirty = (
                self._name.strip() != original.name
                or self._phone.strip() != original.phone
                or _optional(self._email) != original.email
                or _optional(self._address) != original.address
                or self._date_of_birth != original.date_of_birth
                or self._avatar_ref != original.avatar_ref
                or self._avatar_locator != original.avatar_locator
            )
        else:
            self._dirty = (
                bool(self._name.strip())
                or bool(self._phone.strip())
                or bool(self._email.strip())
                or bool(self._address.strip())
                or self._date_of_birth is not None
                or self._avatar_ref is not None
                or self._avatar_locator is not None
            )

    def _build_contact(self) -> Contact:
        values = {
            "name": self._name.strip(),
            "phone": self._phone.strip(),
            "email": _optional(self._email),
            "address": _optional(self._address),
            "date_of_birth": self._date_of_birth,
            "avatar_ref": self._avatar_ref,
            "avatar_locator": self._avatar_locator,
        }
        if self._original is not None:
            return dataclasses.replace(self._original, **values)
        return Contact(**values)
