"""Error classification and user-facing messages."""

import logging

from contactavatar.application import ErrorKind, Severity, StoreError, handle_error
from contactavatar.application.errors import GENERIC_MESSAGE, categorize


def test_categorize():
    assert categorize(StoreError("x")) is ErrorKind.STORE
    assert categorize(PermissionError("x")) is ErrorKind.PERMISSION
    assert categorize(FileNotFoundError("x")) is ErrorKind.FILE_IO
    assert categorize(ValueError("x")) is ErrorKind.VALIDATION
    assert categorize(RuntimeError("x")) is ErrorKind.UNKNOWN


def test_store_errors_hide_raw_text(caplog):
    with caplog.at_level(logging.ERROR):
        handled = handle_error(StoreError("constraint violated on node 42"))
    assert handled.severity is Severity.HIGH
    assert "42" not in handled.user_message
    assert handled.recovery
    assert "constraint violated" in caplog.text


def test_validation_errors_surface_their_message():
    handled = handle_error(ValueError("Name is required"))
    assert handled.kind is ErrorKind.VALIDATION
    assert handled.severity is Severity.LOW
    assert handled.user_message == "Name is required"


def test_unknown_errors_get_generic_message():
    handled = handle_error(RuntimeError("boom"))
    assert handled.user_message == GENERIC_MESSAGE
    assert handled.message == "boom"


def test_explicit_kind_and_message_win():
    handled = handle_error(RuntimeError(""), kind=ErrorKind.FILE_IO, user_message="Pick another image.")
    assert handled.kind is ErrorKind.FILE_IO
    assert handled.user_message == "Pick another image."
    assert handled.message == "RuntimeError"
