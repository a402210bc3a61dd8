"""Central error handling: classify a failure, log it once, and pick what the user sees.

Raw exception text is only surfaced for validation errors; everything else maps
to a generic message plus a recovery hint.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from contactavatar.application.ports import StoreError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Something went wrong. Please try again."


class ErrorKind(Enum):
    STORE = "store"
    VALIDATION = "validation"
    FILE_IO = "file_io"
    PERMISSION = "permission"
    UNKNOWN = "unknown"


class Severity(Enum):
    LOW = 1  # user can continue
    MEDIUM = 2  # feature degraded
    HIGH = 3  # operation failed


_SEVERITY = {
    ErrorKind.STORE: Severity.HIGH,
    ErrorKind.VALIDATION: Severity.LOW,
    ErrorKind.FILE_IO: Severity.MEDIUM,
    ErrorKind.PERMISSION: Severity.HIGH,
    ErrorKind.UNKNOWN: Severity.MEDIUM,
}

_USER_MESSAGES = {
    ErrorKind.STORE: "Could not reach your contacts. Please try again.",
    ErrorKind.FILE_IO: "Could not load the avatar image.",
    ErrorKind.PERMISSION: "Permission denied. Please grant the required permissions.",
    ErrorKind.UNKNOWN: GENERIC_MESSAGE,
}

_RECOVERY = {
    ErrorKind.STORE: "Try restarting the app or clearing its data.",
    ErrorKind.VALIDATION: "Please check your input and try again.",
    ErrorKind.FILE_IO: "Try selecting a different image.",
    ErrorKind.PERMISSION: "Grant permissions in the app settings.",
    ErrorKind.UNKNOWN: "Try again or contact support if the issue persists.",
}

_LOG_LEVEL = {
    Severity.LOW: logging.DEBUG,
    Severity.MEDIUM: logging.WARNING,
    Severity.HIGH: logging.ERROR,
}


@dataclass(frozen=True)
class HandledError:
    kind: ErrorKind
    severity: Severity
    message: str
    user_message: str
    recovery: str | None
    error: BaseException | None = None


def categorize(error: BaseException) -> ErrorKind:
    if isinstance(error, StoreError):
        return ErrorKind.STORE
    if isinstance(error, PermissionError):
        return ErrorKind.PERMISSION
    if isinstance(error, OSError):
        return ErrorKind.FILE_IO
    if isinstance(error, ValueError):
        return ErrorKind.VALIDATION
    return ErrorKind.UNKNOWN


def handle_error(
    error: BaseException,
    kind: ErrorKind | None = None,
    user_message: str | None = None,
) -> HandledError:
    """Classify and log error; return what the caller should show the user."""
    kind = kind or categorize(error)
    severity = _SEVERITY[kind]
    message = str(error) or type(error).__name__
    if user_message is None:
        if kind is ErrorKind.VALIDATION:
            user_message = str(error) or GENERIC_MESSAGE
        else:
            user_message = _USER_MESSAGES[kind]
    handled = HandledError(
        kind=kind,
        severity=severity,
        message=message,
        user_message=user_message,
        recovery=_RECOVERY.get(kind),
        error=error,
    )
    logger.log(
        _LOG_LEVEL[severity],
        "[%s] [%s] %s | Recovery: %s",
        kind.name,
        severity.name,
        message,
        handled.recovery,
        exc_info=error,
    )
    return handled
