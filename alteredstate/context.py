"""Loaded configuration together with the current scenario state."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from alteredstate.app_config import AppConfig
from alteredstate.scenario_state import ScenarioState

PathLike = Union[str, Path]


class InvariantError(RuntimeError):
    """The stored state contradicts what is on disk."""


@dataclass
class AppContext:
    """Configuration and scenario state shared by all commands."""

    config: AppConfig
    scenario_state: ScenarioState

    @classmethod
    def create(cls, config_path: Optional[PathLike] = None) -> "AppContext":
        """Load the configuration, prepare directories and read the state."""
        config = AppConfig.load(config_path)
        config.paths.ensure_directories()
        config.logging.ensure_directories()
        scenario_state = ScenarioState.load(config.paths.scenario_state_file)

        if scenario_state.active_scenario is None:
            scenarios_dir = config.paths.scenarios_directory
            if scenarios_dir.exists() and any(scenarios_dir.iterdir()):
                raise InvariantError(
                    "Invariant violation: No active scenario in state but "
                    "scenarios directory is not empty"
                )
        return cls(config=config, scenario_state=scenario_state)

    def save_scenario_state(self) -> None:
        """Write the scenario state to the configured state file."""
        self.scenario_state.save(self.config.paths.scenario_state_file)