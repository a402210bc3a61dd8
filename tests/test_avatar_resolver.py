"""Tests for AvatarResolver and avatar display precedence."""

from fakes import READABLE_LOCATOR, FakeCapabilities

from contactavatar.application import AvatarResolver, effective_avatar
from contactavatar.domain import DEFAULT_AVATAR_REF, Contact

GONE_LOCATOR = "file:///avatars/deleted.png"


def _contact(**kwargs) -> Contact:
    return Contact(name="Alice", phone="+12025551234", **kwargs)


def _resolver(**kwargs) -> AvatarResolver:
    return AvatarResolver(FakeCapabilities(**kwargs))


def test_no_avatar_is_returned_unchanged():
    contact = _contact()
    assert _resolver().resolve(contact) is contact


def test_valid_ref_and_locator_are_returned_unchanged():
    contact = _contact(avatar_ref=3)
    assert _resolver().resolve(contact) is contact
    contact = _contact(avatar_locator=READABLE_LOCATOR)
    assert _resolver().resolve(contact) is contact


def test_missing_ref_falls_back_to_default():
    resolved = _resolver().resolve(_contact(avatar_ref=999))
    assert resolved.avatar_ref == DEFAULT_AVATAR_REF
    assert resolved.avatar_locator is None


def test_unreadable_locator_is_cleared_and_default_used():
    resolved = _resolver().resolve(_contact(avatar_locator=GONE_LOCATOR))
    assert resolved.avatar_locator is None
    assert resolved.avatar_ref == DEFAULT_AVATAR_REF


def test_both_invalid_yield_default_ref_and_no_locator():
    resolved = _resolver().resolve(_contact(avatar_ref=999, avatar_locator=GONE_LOCATOR))
    assert resolved.avatar_ref == DEFAULT_AVATAR_REF
    assert resolved.avatar_locator is None


def test_resolution_keeps_other_fields():
    original = _contact(id=7, email="alice@mail.com", avatar_ref=999)
    resolved = _resolver().resolve(original)
    assert resolved.id == 7
    assert resolved.email == "alice@mail.com"
    assert resolved.created_at == original.created_at


def test_resolve_is_idempotent():
    resolver = _resolver()
    samples = [
        _contact(),
        _contact(avatar_ref=2),
        _contact(avatar_ref=999),
        _contact(avatar_locator=READABLE_LOCATOR),
        _contact(avatar_locator=GONE_LOCATOR),
        _contact(avatar_ref=999, avatar_locator=GONE_LOCATOR),
        _contact(avatar_ref=4, avatar_locator=READABLE_LOCATOR),
    ]
    for contact in samples:
        once = resolver.resolve(contact)
        assert resolver.resolve(once) == once


def test_idempotent_even_when_default_is_not_renderable():
    resolver = _resolver(refs=())
    once = resolver.resolve(_contact(avatar_ref=5))
    assert once.avatar_ref == DEFAULT_AVATAR_REF
    assert resolver.resolve(once) == once


def test_custom_default_ref():
    resolver = AvatarResolver(FakeCapabilities(), default_ref=2)
    assert resolver.resolve(_contact(avatar_ref=999)).avatar_ref == 2
    assert resolver.default_ref == 2


def test_display_precedence():
    assert effective_avatar(_contact(avatar_ref=3, avatar_locator=READABLE_LOCATOR)).locator == READABLE_LOCATOR
    display = effective_avatar(_contact(avatar_ref=3))
    assert display.ref == 3
    assert display.is_locator is False
    assert effective_avatar(_contact()).ref == DEFAULT_AVATAR_REF


def test_contact_avatar_helpers():
    assert _contact().has_custom_avatar() is False
    assert _contact().display_avatar_ref() == DEFAULT_AVATAR_REF
    assert _contact(avatar_locator=READABLE_LOCATOR).has_custom_avatar() is True
    assert _contact(avatar_ref=4).display_avatar_ref() == 4
