"""Scenario definitions: hooks, snapshots and their on-disk configuration."""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from alteredstate.exclusions import ExclusionConfig
from alteredstate.paths import base_directory

PathLike = Union[str, Path]

CONFIG_FILE_NAME = "config.json"


class ScenarioConfigError(ValueError):
    """A scenario configuration cannot be read, validated or copied."""


class ScenarioHookType(Enum):
    """Moment in a scenario's life at which a hook script runs."""

    PRE_ACTION = "PreAction"
    CLEANUP = "Cleanup"
    ACTIVATION = "Activation"

    def __str__(self) -> str:
        return self.value.lower()


def _ensure_dict(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object")
    return data


def _required(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _optional_string(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    return _string(value, key)


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(value)


def _object_list(value: Any, key: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be a list")
    return value


@dataclass
class ScenarioHookConfig:
    """A script run at a given point of a scenario switch."""

    hook_type: ScenarioHookType
    path: Path
    arguments: list[str] = field(default_factory=list)
    continue_on_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "hook_type": self.hook_type.value,
            "path": str(self.path),
            "arguments": list(self.arguments),
            "continue_on_error": self.continue_on_error,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ScenarioHookConfig":
        data = _ensure_dict(data, "hook")
        raw_type = _required(data, "hook_type")
        try:
            hook_type = ScenarioHookType(raw_type)
        except ValueError:
            raise ValueError(f"unknown hook type {raw_type!r}") from None
        continue_on_error = _required(data, "continue_on_error")
        if not isinstance(continue_on_error, bool):
            raise ValueError("field `continue_on_error` must be a boolean")
        return cls(
            hook_type=hook_type,
            path=Path(_string(_required(data, "path"), "path")),
            arguments=_string_list(_required(data, "arguments"), "arguments"),
            continue_on_error=continue_on_error,
        )


@dataclass
class SnapshotEntry:
    """A saved directory export belonging to a scenario."""

    name: str = ""
    description: str = ""
    created_at: str = ""
    file_path: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at,
            "file_path": self.file_path,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SnapshotEntry":
        data = _ensure_dict(data, "snapshot")
        return cls(
            **{
                key: _string(_required(data, key), key)
                for key in ("name", "description", "created_at", "file_path")
            }
        )


def _resolve_existing(
    candidate: Path, exe_directory: Path, config_directory: Path, label: str
) -> Path:
    """Find ``candidate`` as given, beside the program, or beside the config file."""
    if candidate.is_absolute():
        if not candidate.exists():
            raise ScenarioConfigError(f"{label} not found at path: {str(candidate)!r}")
        return candidate
    exe_candidate = exe_directory / candidate
    if exe_candidate.exists():
        return exe_candidate
    config_candidate = config_directory / candidate
    if config_candidate.exists():
        return config_candidate
    raise ScenarioConfigError(
        f"{label} not found at either path: {str(exe_candidate)!r} "
        f"or {str(config_candidate)!r}"
    )


def _file_name(path: Path, label: str) -> str:
    if not path.name:
        raise ScenarioConfigError(f"Invalid {label} path: {str(path)!r}")
    return path.name


def _copy(source: Path, target: Path, label: str) -> None:
    try:
        shutil.copy(source, target)
    except OSError as error:
        raise ScenarioConfigError(
            f"Failed to copy {label} from {str(source)!r} to {str(target)!r}: {error}"
        ) from error


@dataclass
class ScenarioConfig:
    """Everything that defines a scenario."""

    name: str
    description: Optional[str] = None
    image_path: Optional[str] = None
    hooks: list[ScenarioHookConfig] = field(default_factory=list)
    exclusions: list[ExclusionConfig] = field(default_factory=list)
    snapshots: list[SnapshotEntry] = field(default_factory=list)
    playable_state: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "image_path": self.image_path,
            "hooks": [hook.to_dict() for hook in self.hooks],
            "exclusions": [exclusion.to_dict() for exclusion in self.exclusions],
            "snapshots": [snapshot.to_dict() for snapshot in self.snapshots],
            "playable_state": self.playable_state,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ScenarioConfig":
        data = _ensure_dict(data, "scenario config")
        return cls(
            name=_string(_required(data, "name"), "name"),
            description=_optional_string(data.get("description"), "description"),
            image_path=_optional_string(data.get("image_path"), "image_path"),
            hooks=[
                ScenarioHookConfig.from_dict(hook)
                for hook in _object_list(_required(data, "hooks"), "hooks")
            ],
            exclusions=[
                ExclusionConfig.from_dict(exclusion)
                for exclusion in _object_list(_required(data, "exclusions"), "exclusions")
            ],
            snapshots=[
                SnapshotEntry.from_dict(snapshot)
                for snapshot in _object_list(data.get("snapshots", []), "snapshots")
            ],
            playable_state=_optional_string(
                data.get("playable_state"), "playable_state"
            ),
        )

    @classmethod
    def load_from_path(cls, path: PathLike) -> "ScenarioConfig":
        """Read, parse and validate a scenario config file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as error:
            raise ScenarioConfigError(
                f"Failed to read scenario config file: {error}"
            ) from error
        try:
            config = cls.from_dict(json.loads(text))
        except ValueError as error:
            raise ScenarioConfigError(
                f"Failed to parse scenario config JSON: {error}"
            ) from error
        config.validate(path)
        return config

    @classmethod
    def load_for_scenario(
        cls, scenarios_dir: PathLike, scenario_name: str
    ) -> "ScenarioConfig":
        config_path = Path(scenarios_dir) / scenario_name / CONFIG_FILE_NAME
        if not config_path.exists():
            raise ScenarioConfigError(
                f"Scenario config not found for scenario '{scenario_name}'"
            )
        return cls.load_from_path(config_path)

    def validate(self, path: PathLike) -> None:
        """Check the config and make hook and image paths absolute.

        Relative paths are looked up beside the program first, then beside
        the config file. The file is rewritten when a path changed.
        """
        if not self.name.strip():
            raise ScenarioConfigError("Scenario name cannot be empty")
        exe_directory = base_directory()
        config_directory = Path(path).parent
        try:
            config_directory = config_directory.resolve(strict=True)
        except OSError:
            pass

        changed = False
        if self.image_path is not None:
            image = Path(self.image_path)
            resolved = _resolve_existing(
                image, exe_directory, config_directory, "Image file"
            )
            if not image.is_absolute():
                self.image_path = str(resolved)
                changed = True

        for hook in self.hooks:
            resolved = _resolve_existing(
                hook.path, exe_directory, config_directory, "Hook script"
            )
            if resolved != hook.path:
                hook.path = resolved
                changed = True

        if changed:
            try:
                self.save_to_path(path)
            except OSError as error:
                raise ScenarioConfigError(
                    f"Failed to persist normalized scenario config: {error}"
                ) from error

    @staticmethod
    def copy_scripts_to_directory(
        hooks: Iterable[ScenarioHookConfig], target_directory: PathLike
    ) -> None:
        for hook in hooks:
            source = Path(hook.path)
            target = Path(target_directory) / _file_name(source, "hook")
            _copy(source, target, "hook script")

    @staticmethod
    def copy_image_to_directory(image_path: PathLike, web_directory: PathLike) -> None:
        source = Path(image_path)
        target = Path(web_directory) / _file_name(source, "image")
        _copy(source, target, "image")

    @staticmethod
    def copy_snapshots_to_directory(
        snapshots: Iterable[SnapshotEntry], target_directory: PathLike
    ) -> None:
        for snapshot in snapshots:
            source = Path(snapshot.file_path)
            if not source.exists():
                raise ScenarioConfigError(
                    f"Snapshot file not found at path: {str(source)!r}"
                )
            target = Path(target_directory) / _file_name(source, "snapshot")
            _copy(source, target, "snapshot file")

    def save_to_path(self, path: PathLike) -> None:
        """Write the config as pretty JSON."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    def finalize_paths(
        self, hooks_dir: PathLike, image_dir: PathLike, save_path: PathLike
    ) -> None:
        """Point hooks and snapshots into ``hooks_dir``, the image into ``image_dir``, and save."""
        hooks_dir = Path(hooks_dir)
        for hook in self.hooks:
            hook.path = hooks_dir / _file_name(Path(hook.path), "hook")
        for snapshot in self.snapshots:
            snapshot.file_path = str(
                hooks_dir / _file_name(Path(snapshot.file_path), "snapshot")
            )
        if self.image_path is not None:
            self.image_path = str(
                Path(image_dir) / _file_name(Path(self.image_path), "image")
            )
        try:
            self.save_to_path(save_path)
        except OSError as error:
            raise ScenarioConfigError(
                f"Failed to save scenario config with finalized paths: {error}"
            ) from error


def load_all(path: PathLike) -> list[ScenarioConfig]:
    """Load the config of every scenario folder under ``path``."""
    try:
        entries = sorted(Path(path).iterdir())
    except OSError as error:
        raise ScenarioConfigError(
            f"Failed to read scenarios directory: {error}"
        ) from error
    return [
        ScenarioConfig.load_from_path(entry / CONFIG_FILE_NAME)
        for entry in entries
        if entry.is_dir() and (entry / CONFIG_FILE_NAME).exists()
    ]