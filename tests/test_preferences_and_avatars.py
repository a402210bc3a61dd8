"""JSON preference file and local avatar probes against real temporary files."""

from contactavatar.infrastructure import JsonFilePreferenceStore, LocalAvatarCapabilities


def test_json_preferences_round_trip(tmp_path):
    path = tmp_path / "nested" / "prefs.json"
    store = JsonFilePreferenceStore(path)
    assert store.get("sort_order") is None

    store.set("sort_order", "NAME_DESC")
    assert path.exists()
    assert JsonFilePreferenceStore(path).get("sort_order") == "NAME_DESC"


def test_json_preferences_ignore_corrupt_file(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFilePreferenceStore(path)
    assert store.get("sort_order") is None
    store.set("sort_order", "RECENTLY_ADDED")
    assert store.get("sort_order") == "RECENTLY_ADDED"


def test_json_preferences_ignore_non_object(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFilePreferenceStore(path).get("sort_order") is None


def test_builtin_catalogue():
    caps = LocalAvatarCapabilities(builtin_refs=(1, 2, 3))
    assert caps.resource_exists(2) is True
    assert caps.resource_exists(4) is False


def test_locator_probes(tmp_path):
    image = tmp_path / "alice.png"
    image.write_bytes(b"\x89PNG")
    empty = tmp_path / "empty.png"
    empty.write_bytes(b"")
    caps = LocalAvatarCapabilities()

    assert caps.locator_accessible(str(image)) is True
    assert caps.locator_accessible(image.as_uri()) is True
    assert caps.locator_accessible(str(empty)) is False
    assert caps.locator_accessible(str(tmp_path / "gone.png")) is False
    assert caps.locator_accessible("content://media/external/images/1") is False
    assert caps.locator_accessible("   ") is False


def test_relative_locator_uses_base_dir(tmp_path):
    (tmp_path / "bob.jpg").write_bytes(b"jpeg")
    assert LocalAvatarCapabilities(base_dir=tmp_path).locator_accessible("bob.jpg") is True
