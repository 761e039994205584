import json
import shutil

import pytest

from instance_handling.errors import (
    ConfigIOError,
    ConfigParseError,
    FolderDeleteError,
    InvariantViolation,
)
from instance_handling.registry import (
    Registry,
    config_path,
    load_or_seed,
    prompt_default_launcher_path,
)
from utils.data_model import Instance


def test_seed_creates_only_default_instance():
    registry = Registry.seed("/games/sdv/StardewModdingAPI")

    assert registry.names() == ["Default"]
    assert registry.get("Default") == Instance(folder_name="Mods")
    assert registry.get("Default").launcher_override is None
    assert registry.default_launcher_path == "/games/sdv/StardewModdingAPI"


def test_names_are_lexical_regardless_of_insert_order():
    registry = Registry.seed("/smapi")
    registry.upsert("zeta", Instance(folder_name="Z"))
    registry.upsert("Alt", Instance(folder_name="A"))
    registry.upsert("beta", Instance(folder_name="B"))

    assert registry.names() == ["Alt", "Default", "beta", "zeta"]
    assert list(registry) == registry.names()


def test_save_then_load_round_trips(registry, tmp_path):
    registry.upsert("Override", Instance(folder_name="OvMods", launcher_override="/opt/smapi/StardewModdingAPI"))
    path = tmp_path / "config.json"

    registry.save(path)

    assert Registry.load(path) == registry


def test_saved_file_uses_smapi_path_keys(registry, tmp_path):
    registry.upsert("Override", Instance(folder_name="OvMods", launcher_override="/opt/smapi"))
    path = tmp_path / "config.json"
    registry.save(path)

    data = json.loads(path.read_text(encoding='utf-8'))

    assert data["smapi_path"] == registry.default_launcher_path
    assert data["instances"]["Default"] == {"folder_name": "Mods", "smapi_path": None}
    assert data["instances"]["Override"] == {"folder_name": "OvMods", "smapi_path": "/opt/smapi"}


def test_save_overwrites_existing_file(registry, tmp_path):
    path = tmp_path / "config.json"
    path.write_text("garbage that is much longer than anything else" * 100, encoding='utf-8')

    registry.save(path)

    assert Registry.load(path) == registry


def test_load_accepts_hand_written_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "instances": {
            "Default": {"folder_name": "Mods", "smapi_path": None},
            "Expanded": {"folder_name": "ExpandedMods", "smapi_path": "/other/StardewModdingAPI"},
        },
        "smapi_path": "/games/sdv/StardewModdingAPI",
    }), encoding='utf-8')

    registry = Registry.load(path)

    assert registry.names() == ["Default", "Expanded"]
    assert registry.get("Expanded").launcher_override == "/other/StardewModdingAPI"


def test_load_missing_file_raises_io_error(tmp_path):
    with pytest.raises(ConfigIOError):
        Registry.load(tmp_path / "missing.json")


def test_load_directory_raises_io_error(tmp_path):
    with pytest.raises(ConfigIOError):
        Registry.load(tmp_path)


@pytest.mark.parametrize("contents", [
    "",
    "{not json",
    json.dumps({"instances": {}, "smapi_path": "/smapi"}),
    json.dumps({"instances": {"": {"folder_name": "Mods", "smapi_path": None}}, "smapi_path": "/smapi"}),
    json.dumps({"instances": {"Default": {"folder_name": "", "smapi_path": None}}, "smapi_path": "/smapi"}),
    json.dumps({"instances": {"Default": {"folder_name": "Mods", "smapi_path": None}}}),
])
def test_load_malformed_content_raises_parse_error(tmp_path, contents):
    path = tmp_path / "config.json"
    path.write_text(contents, encoding='utf-8')

    with pytest.raises(ConfigParseError):
        Registry.load(path)


def test_load_non_utf8_content_raises_parse_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_bytes(b"\xff\xfe garbage")

    with pytest.raises(ConfigParseError, match="not valid UTF-8"):
        Registry.load(path)


def test_save_to_unwritable_destination_raises_io_error(registry, tmp_path):
    with pytest.raises(ConfigIOError):
        registry.save(tmp_path)


def test_upsert_overwrites_existing_name(registry):
    registry.upsert("Alt", Instance(folder_name="Replaced"))

    assert registry.get("Alt").folder_name == "Replaced"
    assert len(registry) == 2


def test_get_unknown_name_raises_value_error(registry):
    with pytest.raises(ValueError, match="Unknown instance"):
        registry.get("Nope")


def test_remove_last_instance_is_rejected():
    registry = Registry.seed("/smapi")

    with pytest.raises(InvariantViolation):
        registry.remove("Default")

    assert registry.names() == ["Default"]


def test_remove_last_instance_is_rejected_before_deleting_folder(tmp_path):
    (tmp_path / "Mods").mkdir()
    registry = Registry.seed(str(tmp_path / "StardewModdingAPI"))

    with pytest.raises(InvariantViolation):
        registry.remove("Default", delete_folder=True)

    assert (tmp_path / "Mods").is_dir()


def test_soft_remove_keeps_folder(registry, game_dir):
    removed = registry.remove("Alt")

    assert removed.folder_name == "AltMods"
    assert "Alt" not in registry
    assert (game_dir / "AltMods").is_dir()


def test_hard_remove_deletes_folder_and_entry(registry, game_dir):
    (game_dir / "AltMods" / "SomeMod").mkdir()
    (game_dir / "AltMods" / "SomeMod" / "manifest.json").write_text("{}", encoding='utf-8')

    registry.remove("Alt", delete_folder=True)

    assert "Alt" not in registry
    assert not (game_dir / "AltMods").exists()
    assert (game_dir / "Mods").is_dir()


def test_hard_remove_keeps_entry_when_folder_missing(registry, game_dir):
    shutil.rmtree(game_dir / "AltMods")

    with pytest.raises(FolderDeleteError):
        registry.remove("Alt", delete_folder=True)

    assert "Alt" in registry


def test_hard_remove_keeps_entry_when_deletion_fails(registry, game_dir, monkeypatch):
    def failing_rmtree(path, *args, **kwargs):
        raise PermissionError(f"mock permission denied: {path}")

    monkeypatch.setattr("instance_handling.registry.shutil.rmtree", failing_rmtree)

    with pytest.raises(FolderDeleteError):
        registry.remove("Alt", delete_folder=True)

    assert "Alt" in registry
    assert (game_dir / "AltMods").is_dir()


def test_folder_path_uses_launcher_directory_for_relative_names(registry, game_dir, tmp_path):
    assert registry.folder_path(registry.get("Default")) == game_dir / "Mods"

    override = Instance(folder_name="Mods", launcher_override=str(tmp_path / "other" / "StardewModdingAPI"))
    assert registry.folder_path(override) == tmp_path / "other" / "Mods"

    absolute = Instance(folder_name=str(tmp_path / "elsewhere"))
    assert registry.folder_path(absolute) == tmp_path / "elsewhere"


def test_prompt_appends_executable_name():
    path = prompt_default_launcher_path(lambda prompt: "/games/Stardew Valley\r\n")

    assert path == "/games/Stardew Valley/StardewModdingAPI"


def test_load_or_seed_prompts_when_file_missing(tmp_path):
    prompts = []

    def read_line(prompt):
        prompts.append(prompt)
        return "/games/sdv"

    registry = load_or_seed(tmp_path / "config.json", read_line=read_line)

    assert len(prompts) == 1
    assert registry.names() == ["Default"]
    assert registry.default_launcher_path == "/games/sdv/StardewModdingAPI"
    # Seeding never saves on its own
    assert not (tmp_path / "config.json").exists()


def test_load_or_seed_prompts_when_file_empty(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("", encoding='utf-8')

    registry = load_or_seed(path, read_line=lambda prompt: "/games/sdv")

    assert registry.names() == ["Default"]
    assert registry.get("Default") == Instance(folder_name="Mods", launcher_override=None)


def test_load_or_seed_prompts_when_file_not_utf8(tmp_path):
    path = tmp_path / "config.json"
    path.write_bytes(b"\xff\xfe\x00{")

    registry = load_or_seed(path, read_line=lambda prompt: "/games/sdv")

    assert registry.names() == ["Default"]
    assert registry.default_launcher_path == "/games/sdv/StardewModdingAPI"


def test_load_or_seed_uses_existing_file(registry, tmp_path):
    path = tmp_path / "config.json"
    registry.save(path)

    def read_line(prompt):
        raise AssertionError("should not prompt")

    assert load_or_seed(path, read_line=read_line) == registry


def test_config_path_honors_environment(monkeypatch, tmp_path):
    monkeypatch.delenv("SMAPI_MANAGER_CONFIG", raising=False)
    assert config_path().name == "config.json"

    monkeypatch.setenv("SMAPI_MANAGER_CONFIG", str(tmp_path / "custom.json"))
    assert config_path() == tmp_path / "custom.json"
