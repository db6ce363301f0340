"""Persistent record of which scenario is active and which one came before."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, Path]


class ScenarioExportType(Enum):
    """Kinds of directory export kept inside a scenario folder."""

    BASELINE = "baseline"
    CURRENT = "current"
    WORKING = "working"
    SNAPSHOT = "snapshot"

    def __str__(self) -> str:
        return self.value


def _required_str(data: dict, key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


@dataclass(frozen=True)
class ScenarioRef:
    """A scenario name together with the state file it was activated from."""

    scenario: str
    state_file: str

    def to_dict(self) -> dict[str, Any]:
        return {"scenario": self.scenario, "state_file": self.state_file}

    @classmethod
    def from_dict(cls, data: Any) -> "ScenarioRef":
        if not isinstance(data, dict):
            raise ValueError("scenario reference must be a JSON object")
        return cls(
            scenario=_required_str(data, "scenario"),
            state_file=_required_str(data, "state_file"),
        )


@dataclass
class ScenarioState:
    """The active and previous scenario."""

    active_scenario: Optional[ScenarioRef] = None
    previous_scenario: Optional[ScenarioRef] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "active_scenario": (
                self.active_scenario.to_dict() if self.active_scenario else None
            ),
            "previous_scenario": (
                self.previous_scenario.to_dict() if self.previous_scenario else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ScenarioState":
        if not isinstance(data, dict):
            raise ValueError("scenario state must be a JSON object")
        active = data.get("active_scenario")
        previous = data.get("previous_scenario")
        return cls(
            active_scenario=None if active is None else ScenarioRef.from_dict(active),
            previous_scenario=(
                None if previous is None else ScenarioRef.from_dict(previous)
            ),
        )

    @classmethod
    def load(cls, path: PathLike) -> "ScenarioState":
        """Read the state file, falling back to an empty state on any problem."""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            text = "{}"
        try:
            return cls.from_dict(json.loads(text))
        except ValueError:
            return cls()

    def save(self, path: PathLike) -> None:
        """Write the state as pretty JSON, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    def set_active_scenario(self, scenario: ScenarioRef) -> None:
        """Make ``scenario`` active, remembering the one it replaces."""
        self.previous_scenario = self.active_scenario
        self.active_scenario = scenario