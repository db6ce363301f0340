import json

import pytest

from alteredstate.scenario_state import ScenarioExportType, ScenarioRef, ScenarioState


def _ref(name):
    return ScenarioRef(scenario=name, state_file=f"/scenarios/{name}/baseline.bin")


@pytest.mark.parametrize(
    ("export_type", "expected"),
    [
        (ScenarioExportType.BASELINE, "baseline"),
        (ScenarioExportType.CURRENT, "current"),
        (ScenarioExportType.SNAPSHOT, "snapshot"),
    ],
)
def test_export_type_renders_lowercase(export_type, expected):
    state = ScenarioState()
    state.set_active_scenario(
        ScenarioRef(scenario="default", state_file=f"{export_type}.bin")
    )
    assert str(export_type) == expected
    assert state.to_dict()["active_scenario"]["state_file"] == f"{expected}.bin"


def test_new_state_is_empty():
    state = ScenarioState()
    assert state.to_dict() == {"active_scenario": None, "previous_scenario": None}


def test_set_active_scenario_moves_previous():
    state = ScenarioState()
    first, second = _ref("default"), _ref("lab")
    state.set_active_scenario(first)
    assert state.active_scenario == first
    assert state.previous_scenario is None
    state.set_active_scenario(second)
    assert state.active_scenario == second
    assert state.previous_scenario == first


def test_save_and_load_round_trip(tmp_path):
    state = ScenarioState()
    state.set_active_scenario(_ref("default"))
    state.set_active_scenario(_ref("lab"))
    path = tmp_path / "nested" / "scenario_state.json"
    state.save(path)
    assert path.exists()
    assert ScenarioState.load(path) == state


def test_saved_file_is_json(tmp_path):
    state = ScenarioState(active_scenario=_ref("default"))
    path = tmp_path / "state.json"
    state.save(path)
    data = json.loads(path.read_text())
    assert data["active_scenario"] == {
        "scenario": "default",
        "state_file": "/scenarios/default/baseline.bin",
    }
    assert data["previous_scenario"] is None


def test_load_missing_file_gives_empty_state(tmp_path):
    assert ScenarioState.load(tmp_path / "absent.json") == ScenarioState()


def test_load_invalid_json_gives_empty_state(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{ not json")
    assert ScenarioState.load(path) == ScenarioState()


def test_load_partial_document_fills_defaults(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"active_scenario": _ref("lab").to_dict()}))
    loaded = ScenarioState.load(path)
    assert loaded.active_scenario == _ref("lab")
    assert loaded.previous_scenario is None


def test_load_malformed_reference_gives_empty_state(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"active_scenario": {"scenario": "lab"}}))
    assert ScenarioState.load(path) == ScenarioState()


def test_ref_from_dict_requires_fields():
    with pytest.raises(ValueError):
        ScenarioRef.from_dict({"scenario": "lab"})


def test_ref_round_trip():
    ref = _ref("lab")
    assert ScenarioRef.from_dict(ref.to_dict()) == ref