"""Commands that inspect and edit scenarios without touching the directory."""

from __future__ import annotations

from typing import Optional

from alteredstate.context import AppContext
from alteredstate.scenarios import (
    CONFIG_FILE_NAME,
    ScenarioConfig,
    ScenarioConfigError,
    load_all,
)


def list_scenarios(context: AppContext, detailed: bool = False) -> list[ScenarioConfig]:
    """Print the active scenario and every known scenario; return the scenarios."""
    active = context.scenario_state.active_scenario
    if active is not None:
        print(f"Active scenario: {active.scenario}")
    else:
        print("No active scenario")

    scenarios_directory = context.config.paths.scenarios_directory
    try:
        scenarios = load_all(scenarios_directory)
    except ScenarioConfigError as error:
        raise ScenarioConfigError(
            f"Failed to load scenarios from directory {scenarios_directory}: {error}"
        ) from error

    for scenario in scenarios:
        print(f"Scenario: {scenario.name} ")
        if detailed:
            for snapshot in scenario.snapshots:
                print(f"  Snapshot: {snapshot.name}")
    return scenarios


def update_scenario(
    context: AppContext,
    name: str,
    description: Optional[str] = None,
    set_playable: Optional[str] = None,
) -> Optional[ScenarioConfig]:
    """Change a scenario's description and/or playable state.

    Returns the saved configuration, or None when nothing was updated.
    """
    if not name:
        print("Scenario name is required for deletion")
        return None
    if description is None and set_playable is None:
        print("At least one of --description or --set-playable must be provided")
        return None

    scenarios_directory = context.config.paths.scenarios_directory
    scenario_path = scenarios_directory / name
    if not scenario_path.exists():
        print(f"Scenario {name} does not exist")
        return None
    config_path = scenario_path / CONFIG_FILE_NAME
    if not config_path.exists():
        print(f"Scenario {name} does not have a config.json file")
        return None

    scenario_config = ScenarioConfig.load_for_scenario(scenarios_directory, name)
    if description is not None:
        scenario_config.description = description
    if set_playable is not None:
        scenario_config.playable_state = set_playable
    scenario_config.save_to_path(config_path)
    print(f"Scenario {name} has been updated")
    return scenario_config