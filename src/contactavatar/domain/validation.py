"""Field validation for contact forms.

Phone numbers use the strict international strategy: a leading "+" and a
number that libphonenumber accepts as valid. Validation never raises; every
check returns Success or Error(reason).
"""

from dataclasses import dataclass
from enum import Enum

import phonenumbers
from email_validator import EmailNotValidError, validate_email as _check_email

from contactavatar.domain.entities import NAME_MAX_LENGTH


class ValidationError(Enum):
    NAME_REQUIRED = "Name is required."
    NAME_TOO_LONG = f"Name must be at most {NAME_MAX_LENGTH} characters."
    PHONE_REQUIRED = "Phone number is required."
    PHONE_COUNTRY_CODE_REQUIRED = "Phone number must start with + and a country code."
    PHONE_INVALID = "Phone number is not valid."
    PHONE_TOO_SHORT = "Phone number is too short."
    PHONE_TOO_LONG = "Phone number is too long."
    PHONE_INVALID_COUNTRY_CODE = "Phone number has an unknown country code."
    EMAIL_INVALID = "Email address is not valid."

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class Success:
    is_valid = True


@dataclass(frozen=True)
class Error:
    reason: ValidationError
    is_valid = False

    @property
    def message(self) -> str:
        return self.reason.message


ValidationResult = Success | Error

SUCCESS = Success()

_PARSE_ERRORS = {
    phonenumbers.NumberParseException.INVALID_COUNTRY_CODE: ValidationError.PHONE_INVALID_COUNTRY_CODE,
    phonenumbers.NumberParseException.NOT_A_NUMBER: ValidationError.PHONE_INVALID,
    phonenumbers.NumberParseException.TOO_SHORT_NSN: ValidationError.PHONE_TOO_SHORT,
    phonenumbers.NumberParseException.TOO_SHORT_AFTER_IDD: ValidationError.PHONE_TOO_SHORT,
    phonenumbers.NumberParseException.TOO_LONG: ValidationError.PHONE_TOO_LONG,
}


def validate_name(raw: str | None) -> ValidationResult:
    if not raw or not raw.strip():
        return Error(ValidationError.NAME_REQUIRED)
    if len(raw.strip()) > NAME_MAX_LENGTH:
        return Error(ValidationError.NAME_TOO_LONG)
    return SUCCESS


def validate_phone(raw: str | None) -> ValidationResult:
    """Require an international number: "+", country code, valid for that country."""
    if not raw or not raw.strip():
        return Error(ValidationError.PHONE_REQUIRED)
    phone = raw.strip()
    if not phone.startswith("+"):
        return Error(ValidationError.PHONE_COUNTRY_CODE_REQUIRED)
    try:
        parsed = phonenumbers.parse(phone, None)
    except phonenumbers.NumberParseException as e:
        return Error(_PARSE_ERRORS.get(e.error_type, ValidationError.PHONE_INVALID))
    if not phonenumbers.is_valid_number(parsed):
        return Error(ValidationError.PHONE_INVALID)
    return SUCCESS


def validate_email(raw: str | None) -> ValidationResult:
    """Email is optional: blank passes, anything else must be a syntactically valid address."""
    if not raw or not raw.strip():
        return SUCCESS
    try:
        _check_email(raw.strip(), check_deliverability=False)
    except EmailNotValidError:
        return Error(ValidationError.EMAIL_INVALID)
    return SUCCESS


def validate_address(raw: str | None) -> ValidationResult:
    return SUCCESS


def is_form_valid(
    name_result: ValidationResult,
    phone_result: ValidationResult,
    email_result: ValidationResult,
) -> bool:
    """Save gate. Address never takes part."""
    return name_result.is_valid and phone_result.is_valid and email_result.is_valid
