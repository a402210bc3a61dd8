"""Domain layer: entities and field validation. No dependencies on outer layers."""

from contactavatar.domain.entities import (
    BUILTIN_AVATAR_REFS,
    DEFAULT_AVATAR_REF,
    NAME_MAX_LENGTH,
    Contact,
    SortOrder,
)
from contactavatar.domain.validation import (
    SUCCESS,
    Error,
    Success,
    ValidationError,
    ValidationResult,
    is_form_valid,
    validate_address,
    validate_email,
    validate_name,
    validate_phone,
)

__all__ = [
    "BUILTIN_AVATAR_REFS",
    "Contact",
    "DEFAULT_AVATAR_REF",
    "Error",
    "NAME_MAX_LENGTH",
    "SUCCESS",
    "SortOrder",
    "Success",
    "ValidationError",
    "ValidationResult",
    "is_form_valid",
    "validate_address",
    "validate_email",
    "validate_name",
    "validate_phone",
]
