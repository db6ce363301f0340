"""Application configuration read from a JSON file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from alteredstate.paths import LoggingConfig, PathsConfig, base_directory

PathLike = Union[str, Path]


class ConfigError(ValueError):
    """The configuration file is missing or invalid."""


@dataclass
class AppConfig:
    """Domain to manage, its controller, and where things are kept."""

    domain: str
    hostname: str
    never_touch_these_attributes: list[str] = field(default_factory=list)
    paths: PathsConfig = field(default_factory=PathsConfig.default)
    logging: LoggingConfig = field(default_factory=LoggingConfig.default)

    @classmethod
    def from_dict(cls, data: Any, base_dir: Optional[PathLike] = None) -> "AppConfig":
        """Build from a mapping; path defaults are placed under ``base_dir``."""
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a JSON object")
        values: dict[str, Any] = {}
        for key in ("domain", "hostname"):
            if key not in data:
                raise ConfigError(f"missing field `{key}`")
            if not isinstance(data[key], str):
                raise ConfigError(f"field `{key}` must be a string")
            values[key] = data[key]
        attributes = data.get("never_touch_these_attributes", [])
        if not isinstance(attributes, list) or not all(
            isinstance(item, str) for item in attributes
        ):
            raise ConfigError(
                "field `never_touch_these_attributes` must be a list of strings"
            )
        try:
            paths = PathsConfig.from_dict(data.get("paths", {}), base_dir)
            logging_config = LoggingConfig.from_dict(data.get("logging", {}), base_dir)
        except ValueError as error:
            raise ConfigError(str(error)) from error
        return cls(
            domain=values["domain"],
            hostname=values["hostname"],
            never_touch_these_attributes=list(attributes),
            paths=paths,
            logging=logging_config,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "hostname": self.hostname,
            "never_touch_these_attributes": list(self.never_touch_these_attributes),
            "paths": self.paths.to_dict(),
            "logging": self.logging.to_dict(),
        }

    @classmethod
    def load(cls, path: Optional[PathLike] = None) -> "AppConfig":
        """Read ``path``, or config.json beside the program when none is given."""
        config_path = Path(path) if path is not None else base_directory() / "config.json"
        if not config_path.is_file():
            raise ConfigError(f"configuration file {config_path} not found")
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as error:
            raise ConfigError(f"cannot read configuration {config_path}: {error}") from error
        return cls.from_dict(data, base_directory())