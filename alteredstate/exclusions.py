"""Rules describing directory objects whose changes are tolerated."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional


class ObjectChangeType(Enum):
    CREATED = "Created"
    REMOVED = "Removed"
    MODIFIED = "Modified"


def _ensure_dict(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object")
    return data


def _required(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(value)


@dataclass
class ObjectMatch:
    """Criteria selecting objects by name, OU or DN."""

    name_exact: Optional[str] = None
    name_prefix: Optional[str] = None
    name_contains: Optional[str] = None
    ou: Optional[str] = None
    dn_contains: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Any) -> "ObjectMatch":
        data = _ensure_dict(data, "object match")
        values = {}
        for f in fields(cls):
            value = data.get(f.name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"field `{f.name}` must be a string or null")
            values[f.name] = value
        return cls(**values)


@dataclass
class ChangeRule:
    """A kind of change and the attributes to ignore for it."""

    change_type: ObjectChangeType
    additional_ignored_attributes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "change_type": self.change_type.value,
            "additional_ignored_attributes": list(self.additional_ignored_attributes),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ChangeRule":
        data = _ensure_dict(data, "change rule")
        raw_type = _required(data, "change_type")
        try:
            change_type = ObjectChangeType(raw_type)
        except ValueError:
            raise ValueError(f"unknown change type {raw_type!r}") from None
        return cls(
            change_type=change_type,
            additional_ignored_attributes=_string_list(
                _required(data, "additional_ignored_attributes"),
                "additional_ignored_attributes",
            ),
        )


@dataclass
class ExclusionConfig:
    """A named exclusion: which objects it matches and which changes it allows."""

    name: str
    match_: ObjectMatch
    rules: list[ChangeRule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "match_": self.match_.to_dict(),
            "rules": [rule.to_dict() for rule in self.rules],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ExclusionConfig":
        data = _ensure_dict(data, "exclusion")
        name = _required(data, "name")
        if not isinstance(name, str):
            raise ValueError("field `name` must be a string")
        rules = _required(data, "rules")
        if not isinstance(rules, list):
            raise ValueError("field `rules` must be a list")
        return cls(
            name=name,
            match_=ObjectMatch.from_dict(_required(data, "match_")),
            rules=[ChangeRule.from_dict(rule) for rule in rules],
        )