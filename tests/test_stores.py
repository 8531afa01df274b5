import json
import pytest

from fancygit.exceptions import ConfigError
from fancygit.schemas import Settings
from fancygit.stores import FormatStore, SettingsStore

DEFAULT_RECORD = {
    "logSettings": False,
    "triggerGitAdd": True,
    "triggerNpm": True,
    "triggerMessageFormatter": True,
    "triggerPush": True,
    "commitMessageStyle": "clean",
}

PREFIXES = {
    "feat": "[feat]",
    "fix": "[fix]",
    "chore": "[chore]",
    "docs": "[docs]",
    "style": "[style]",
    "refactor": "[refactor]",
    "test": "[test]",
}


# --- SettingsStore ---


def test_settings_default_when_missing(tmp_path):
    store = SettingsStore(tmp_path)

    assert store.get().to_json_dict() == DEFAULT_RECORD
    # Reading never creates the file.
    assert not store.exists()


def test_settings_save_writes_whole_record_camel_case(tmp_path):
    store = SettingsStore(tmp_path)
    store.save(Settings(trigger_push=False, commit_message_style="modern"))

    on_disk = json.loads((tmp_path / ".fancygit" / "settings.json").read_text())
    assert on_disk == {**DEFAULT_RECORD, "triggerPush": False, "commitMessageStyle": "modern"}
    assert store.get().trigger_push is False


def test_settings_partial_file_is_completed_with_defaults(tmp_path):
    path = tmp_path / ".fancygit" / "settings.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"triggerNpm": False}))

    settings = SettingsStore(tmp_path).get()

    assert settings.trigger_npm is False
    assert settings.trigger_git_add is True
    assert settings.commit_message_style == "clean"


def test_settings_empty_file_is_default(tmp_path):
    path = tmp_path / ".fancygit" / "settings.json"
    path.parent.mkdir()
    path.write_text("")

    assert SettingsStore(tmp_path).get().to_json_dict() == DEFAULT_RECORD


def test_settings_malformed_json_raises(tmp_path):
    path = tmp_path / ".fancygit" / "settings.json"
    path.parent.mkdir()
    path.write_text("{not json")

    with pytest.raises(ConfigError):
        SettingsStore(tmp_path).get()


def test_settings_custom_config_dir_name(tmp_path):
    store = SettingsStore(tmp_path, config_dir_name=".other")
    store.save(Settings())
    assert (tmp_path / ".other" / "settings.json").is_file()


# --- FormatStore ---


def test_formats_empty_when_missing(tmp_path):
    store = FormatStore(tmp_path)
    assert store.list() == {}
    assert store.get("anything") is None


def test_add_then_get(tmp_path):
    store = FormatStore(tmp_path)

    assert store.add("mine", PREFIXES) is True
    assert store.get("mine") == PREFIXES
    assert (tmp_path / ".fancygit" / "formats.json").is_file()


def test_add_trims_prefixes(tmp_path):
    store = FormatStore(tmp_path)
    store.add("mine", {"feat": "  feat:  ", "fix": "fix:"})
    assert store.get("mine") == {"feat": "feat:", "fix": "fix:"}


def test_add_existing_is_noop(tmp_path):
    store = FormatStore(tmp_path)
    store.add("mine", PREFIXES)
    before = store.local_path.read_text()

    assert store.add("mine", {"feat": "changed"}) is False
    assert store.local_path.read_text() == before


def test_remove_missing_does_not_write(tmp_path):
    store = FormatStore(tmp_path)

    assert store.remove("ghost") is False
    assert not store.local_path.exists()


def test_remove_existing(tmp_path):
    store = FormatStore(tmp_path)
    store.add("a", PREFIXES)
    store.add("b", PREFIXES)

    assert store.remove("a") is True
    assert list(store.list()) == ["b"]


def test_global_file_used_when_no_local(tmp_path, isolated_user_config):
    store = FormatStore(tmp_path)
    store.add("shared", PREFIXES, is_global=True)

    assert (isolated_user_config / "formats.json").is_file()
    assert not store.local_path.exists()
    assert store.exists("shared")


def test_local_file_shadows_global(tmp_path):
    store = FormatStore(tmp_path)
    store.add("shared", PREFIXES, is_global=True)
    store.save({"local": PREFIXES})

    assert list(store.list()) == ["local"]


def test_formats_file_must_be_object(tmp_path):
    path = tmp_path / ".fancygit" / "formats.json"
    path.parent.mkdir()
    path.write_text("[]")

    with pytest.raises(ConfigError):
        FormatStore(tmp_path).list()


@pytest.fixture
def both_format_files(tmp_path, isolated_user_config):
    """A global file holding "team" shadowed by a local file holding "mine"."""
    store = FormatStore(tmp_path)
    store.save({"team": PREFIXES}, is_global=True)
    store.save({"mine": PREFIXES})
    return store


def _global_formats(isolated_user_config):
    return json.loads((isolated_user_config / "formats.json").read_text())


def test_global_remove_reads_global_file_under_local_shadow(both_format_files, isolated_user_config):
    store = both_format_files

    assert store.remove("team", is_global=True) is True
    assert _global_formats(isolated_user_config) == {}
    assert store.list() == {"mine": PREFIXES}


def test_global_remove_ignores_local_only_format(both_format_files, isolated_user_config):
    store = both_format_files

    assert store.remove("mine", is_global=True) is False
    assert _global_formats(isolated_user_config) == {"team": PREFIXES}
    assert store.exists("mine")


def test_global_add_keeps_local_formats_out_of_global_file(both_format_files, isolated_user_config):
    store = both_format_files

    assert store.add("new", PREFIXES, is_global=True) is True
    assert _global_formats(isolated_user_config) == {"team": PREFIXES, "new": PREFIXES}
    assert store.list() == {"mine": PREFIXES}


def test_contains_checks_the_written_file(both_format_files):
    store = both_format_files

    assert store.contains("mine") is True
    assert store.contains("mine", is_global=True) is False
    assert store.contains("team", is_global=True) is True
