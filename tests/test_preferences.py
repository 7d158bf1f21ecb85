import pytest

from src.academy_admin.services.preferences import (
    ACTIVE_TAB_KEY,
    AUTH_ADMIN_KEY,
    AUTH_TOKEN_KEY,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
)


def test_active_tab_defaults_and_ignores_unknown_values():
    store = InMemoryPreferenceStore({ACTIVE_TAB_KEY: "billing"})

    assert store.active_tab() == "import-export"

    store.set_active_tab("modules")
    assert store.active_tab() == "modules"


def test_set_active_tab_rejects_unknown_tab():
    store = InMemoryPreferenceStore()

    with pytest.raises(ValueError):
        store.set_active_tab("billing")


def test_toggle_theme():
    store = InMemoryPreferenceStore()

    assert store.theme() == "light"
    assert store.toggle_theme() == "dark"
    assert store.toggle_theme() == "light"


def test_clear_auth_removes_only_auth_keys():
    store = InMemoryPreferenceStore({AUTH_TOKEN_KEY: "t", AUTH_ADMIN_KEY: "a", ACTIVE_TAB_KEY: "programs"})

    store.clear_auth()

    assert store.get(AUTH_TOKEN_KEY) is None
    assert store.get(AUTH_ADMIN_KEY) is None
    assert store.active_tab() == "programs"


def test_json_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "prefs" / "preferences.json"
    store = JsonFilePreferenceStore(str(path))
    store.set(AUTH_TOKEN_KEY, "abc")
    store.set_active_tab("participants")

    reloaded = JsonFilePreferenceStore(str(path))

    assert reloaded.get(AUTH_TOKEN_KEY) == "abc"
    assert reloaded.active_tab() == "participants"

    reloaded.remove(AUTH_TOKEN_KEY)
    assert JsonFilePreferenceStore(str(path)).get(AUTH_TOKEN_KEY) is None


def test_json_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonFilePreferenceStore(str(path))

    assert store.get(AUTH_TOKEN_KEY) is None
    store.set("theme", "dark")
    assert JsonFilePreferenceStore(str(path)).theme() == "dark"
