import json
from pathlib import Path

import pytest

from alteredstate.exclusions import ExclusionConfig, ObjectMatch
from alteredstate.scenarios import (
    ScenarioConfig,
    ScenarioConfigError,
    ScenarioHookConfig,
    ScenarioHookType,
    SnapshotEntry,
    load_all,
)


def _write_config(directory: Path, data: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _minimal(name: str) -> dict:
    return {"name": name, "hooks": [], "exclusions": []}


def test_hook_type_display_and_wire_names():
    assert str(ScenarioHookType.PRE_ACTION) == "preaction"
    assert str(ScenarioHookType.CLEANUP) == "cleanup"
    assert ScenarioHookType("Activation") is ScenarioHookType.ACTIVATION


def test_config_round_trip():
    config = ScenarioConfig(
        name="lab",
        description="desc",
        image_path="/img/a.png",
        hooks=[
            ScenarioHookConfig(
                ScenarioHookType.CLEANUP, Path("/s/clean.ps1"), ["-x"], True
            )
        ],
        exclusions=[ExclusionConfig("ex", ObjectMatch(name_exact="bob"), [])],
        snapshots=[SnapshotEntry("snapshot-1", "d", "now", "/s/snapshot-1.bin")],
        playable_state="baseline.bin",
    )
    assert ScenarioConfig.from_dict(config.to_dict()) == config
    assert config.to_dict()["hooks"][0]["hook_type"] == "Cleanup"


def test_optional_fields_default():
    config = ScenarioConfig.from_dict(_minimal("lab"))
    assert config.snapshots == []
    assert config.playable_state is None
    assert config.description is None


def test_missing_hooks_rejected():
    with pytest.raises(ValueError):
        ScenarioConfig.from_dict({"name": "lab", "exclusions": []})


def test_unknown_hook_type_rejected():
    with pytest.raises(ValueError):
        ScenarioHookConfig.from_dict(
            {"hook_type": "Nope", "path": "a", "arguments": [], "continue_on_error": False}
        )


def test_save_and_load_round_trip(tmp_path):
    config = ScenarioConfig(name="lab", description="x", playable_state="baseline.bin")
    path = tmp_path / "config.json"
    config.save_to_path(path)
    assert ScenarioConfig.load_from_path(path) == config


def test_load_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ScenarioConfigError, match="Failed to parse"):
        ScenarioConfig.load_from_path(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(ScenarioConfigError, match="Failed to read"):
        ScenarioConfig.load_from_path(tmp_path / "absent.json")


def test_empty_name_rejected(tmp_path):
    path = _write_config(tmp_path, _minimal("   "))
    with pytest.raises(ScenarioConfigError, match="Scenario name cannot be empty"):
        ScenarioConfig.load_from_path(path)


def test_relative_hook_resolved_and_persisted(tmp_path):
    scenario_dir = tmp_path / "scn"
    data = _minimal("lab")
    data["hooks"] = [
        {
            "hook_type": "PreAction",
            "path": "run_unique_hook.ps1",
            "arguments": [],
            "continue_on_error": False,
        }
    ]
    path = _write_config(scenario_dir, data)
    (scenario_dir / "run_unique_hook.ps1").write_text("x", encoding="utf-8")
    config = ScenarioConfig.load_from_path(path)
    expected = scenario_dir.resolve() / "run_unique_hook.ps1"
    assert config.hooks[0].path == expected
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["hooks"][0]["path"] == str(expected)


def test_missing_absolute_image_rejected(tmp_path):
    data = _minimal("lab")
    data["image_path"] = str(tmp_path / "missing.png")
    path = _write_config(tmp_path / "scn", data)
    with pytest.raises(ScenarioConfigError, match="Image file not found"):
        ScenarioConfig.load_from_path(path)


def test_missing_relative_hook_rejected(tmp_path):
    data = _minimal("lab")
    data["hooks"] = [
        {
            "hook_type": "Cleanup",
            "path": "nowhere_unique.ps1",
            "arguments": [],
            "continue_on_error": False,
        }
    ]
    path = _write_config(tmp_path / "scn", data)
    with pytest.raises(ScenarioConfigError, match="either path"):
        ScenarioConfig.load_from_path(path)


def test_load_for_scenario(tmp_path):
    _write_config(tmp_path / "alpha", _minimal("alpha"))
    assert ScenarioConfig.load_for_scenario(tmp_path, "alpha").name == "alpha"
    with pytest.raises(ScenarioConfigError, match="Scenario config not found for scenario 'beta'"):
        ScenarioConfig.load_for_scenario(tmp_path, "beta")


def test_load_all_skips_folders_without_config(tmp_path):
    _write_config(tmp_path / "alpha", _minimal("alpha"))
    _write_config(tmp_path / "beta", _minimal("beta"))
    (tmp_path / "empty").mkdir()
    (tmp_path / "scenario_state.json").write_text("{}", encoding="utf-8")
    names = sorted(config.name for config in load_all(tmp_path))
    assert names == ["alpha", "beta"]


def test_load_all_missing_directory(tmp_path):
    with pytest.raises(ScenarioConfigError):
        load_all(tmp_path / "nope")


def test_copy_scripts_and_image(tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    script = source / "a.ps1"
    script.write_text("content", encoding="utf-8")
    image = source / "pic.png"
    image.write_bytes(b"\x89PNG")
    target = tmp_path / "dst"
    target.mkdir()
    ScenarioConfig.copy_scripts_to_directory(
        [ScenarioHookConfig(ScenarioHookType.ACTIVATION, script)], target
    )
    ScenarioConfig.copy_image_to_directory(image, target)
    assert (target / "a.ps1").read_text(encoding="utf-8") == "content"
    assert (target / "pic.png").read_bytes() == b"\x89PNG"


def test_copy_missing_script_fails(tmp_path):
    with pytest.raises(ScenarioConfigError, match="Failed to copy"):
        ScenarioConfig.copy_scripts_to_directory(
            [ScenarioHookConfig(ScenarioHookType.CLEANUP, tmp_path / "none.ps1")],
            tmp_path,
        )


def test_copy_snapshots(tmp_path):
    snap = tmp_path / "snapshot-1.bin"
    snap.write_bytes(b"data")
    target = tmp_path / "out"
    target.mkdir()
    ScenarioConfig.copy_snapshots_to_directory(
        [SnapshotEntry("snapshot-1", "d", "t", str(snap))], target
    )
    assert (target / "snapshot-1.bin").read_bytes() == b"data"
    with pytest.raises(ScenarioConfigError, match="Snapshot file not found"):
        ScenarioConfig.copy_snapshots_to_directory(
            [SnapshotEntry("x", "d", "t", str(tmp_path / "gone.bin"))], target
        )


def test_finalize_paths(tmp_path):
    config = ScenarioConfig(
        name="lab",
        image_path="/elsewhere/pic.png",
        hooks=[ScenarioHookConfig(ScenarioHookType.CLEANUP, Path("/elsewhere/h.ps1"))],
        snapshots=[SnapshotEntry("s", "d", "t", "/elsewhere/s.bin")],
    )
    hooks_dir = tmp_path / "scn"
    image_dir = tmp_path / "images"
    hooks_dir.mkdir()
    save_path = hooks_dir / "config.json"
    config.finalize_paths(hooks_dir, image_dir, save_path)
    assert config.hooks[0].path == hooks_dir / "h.ps1"
    assert config.snapshots[0].file_path == str(hooks_dir / "s.bin")
    assert config.image_path == str(image_dir / "pic.png")
    saved = json.loads(save_path.read_text(encoding="utf-8"))
    assert saved == config.to_dict()