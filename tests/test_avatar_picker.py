"""AvatarPicker: built-in and custom avatars are mutually exclusive."""

import pytest

from contactavatar.application import AvatarPicker, AvatarSelection
from contactavatar.domain import BUILTIN_AVATAR_REFS, DEFAULT_AVATAR_REF


def test_initial_selection_has_no_changes():
    picker = AvatarPicker(3, None)
    assert picker.selection == AvatarSelection(ref=3)
    assert picker.has_changes is False
    assert picker.available == BUILTIN_AVATAR_REFS


def test_select_builtin_clears_custom_locator():
    picker = AvatarPicker(None, "file:///me.png")
    assert picker.has_custom_locator is True
    picker.select_builtin(5)
    assert picker.selection == AvatarSelection(ref=5)
    assert picker.has_custom_locator is False
    assert picker.has_changes is True


def test_select_custom_clears_builtin():
    picker = AvatarPicker(2)
    picker.select_custom("file:///me.png")
    assert picker.selection == AvatarSelection(locator="file:///me.png")
    assert picker.display_ref() == DEFAULT_AVATAR_REF


def test_empty_custom_locator_resets_to_default():
    picker = AvatarPicker(None, "file:///me.png")
    picker.select_custom("")
    assert picker.selection == AvatarSelection(ref=DEFAULT_AVATAR_REF)


def test_unknown_builtin_is_rejected():
    picker = AvatarPicker()
    with pytest.raises(ValueError):
        picker.select_builtin(999)
    assert picker.selection == AvatarSelection()


def test_reset_to_default():
    picker = AvatarPicker(7)
    picker.reset_to_default()
    assert picker.display_ref() == DEFAULT_AVATAR_REF
    assert picker.has_changes is True
