"""Filesystem layout used by the tool, with defaults beside the program."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

from alteredstate.ldap_options import LdapNamingContexts
from alteredstate.scenario_state import ScenarioState

PathLike = Union[str, Path]


def base_directory() -> Path:
    """Directory holding the running program."""
    program = sys.argv[0] if sys.argv else ""
    if not program:
        return Path.cwd()
    return Path(program).resolve().parent


def _resolve_base(base_dir: Optional[PathLike]) -> Path:
    return Path(base_dir) if base_dir is not None else base_directory()


def _create_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write_json_if_missing(path: Path, document: Any) -> None:
    if not path.exists():
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")


def _path_overrides(cls: type, data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{cls.__name__} section must be a JSON object")
    overrides: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if not isinstance(value, str):
            raise ValueError(f"field `{f.name}` must be a string")
        overrides[f.name] = value
    return overrides


@dataclass
class PathsConfig:
    """Where scripts, images, scenarios and state files live."""

    actions_script_file: Path
    images_directory: Path
    web_directory: Path
    scenarios_directory: Path
    scenario_state_file: Path
    schema_attributes_file: Path
    naming_contexts_file: Path
    temp_directory: Path

    @classmethod
    def default(cls, base_dir: Optional[PathLike] = None) -> "PathsConfig":
        base = _resolve_base(base_dir)
        web_directory = base / "wwwroot"
        temp_directory = base / "temp"
        scenarios_directory = base / "scenarios"
        return cls(
            actions_script_file=temp_directory / "actions.ps1",
            images_directory=web_directory / "images",
            web_directory=web_directory,
            scenarios_directory=scenarios_directory,
            scenario_state_file=scenarios_directory / "scenario_state.json",
            schema_attributes_file=scenarios_directory / "schema_attributes.json",
            naming_contexts_file=scenarios_directory / "naming_contexts.json",
            temp_directory=temp_directory,
        )

    @classmethod
    def from_dict(cls, data: Any, base_dir: Optional[PathLike] = None) -> "PathsConfig":
        """Build from a mapping; absent entries take their default."""
        overrides = _path_overrides(cls, data)
        return replace(
            cls.default(base_dir),
            **{key: Path(value) for key, value in overrides.items()},
        )

    def to_dict(self) -> dict[str, str]:
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}

    def ensure_directories(self) -> None:
        """Create the directories and seed empty state files that are missing."""
        _create_directory(self.images_directory)
        _create_directory(self.scenarios_directory)
        _write_json_if_missing(self.scenario_state_file, ScenarioState().to_dict())
        _write_json_if_missing(
            self.schema_attributes_file,
            {"system_attributes": [], "allow_list": {}},
        )
        _write_json_if_missing(self.naming_contexts_file, LdapNamingContexts().to_dict())
        _create_directory(self.web_directory)
        _create_directory(self.temp_directory)


@dataclass
class LoggingConfig:
    """Where log files go and how they are named."""

    directory: Path
    prefix: str = "log"

    @classmethod
    def default(cls, base_dir: Optional[PathLike] = None) -> "LoggingConfig":
        return cls(directory=_resolve_base(base_dir) / "logs", prefix="log")

    @classmethod
    def from_dict(cls, data: Any, base_dir: Optional[PathLike] = None) -> "LoggingConfig":
        overrides = _path_overrides(cls, data)
        defaults = cls.default(base_dir)
        return cls(
            directory=Path(overrides.get("directory", defaults.directory)),
            prefix=overrides.get("prefix", defaults.prefix),
        )

    def to_dict(self) -> dict[str, str]:
        return {"directory": str(self.directory), "prefix": self.prefix}

    def ensure_directories(self) -> None:
        _create_directory(self.directory)