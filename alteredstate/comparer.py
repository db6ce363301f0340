"""Work out the actions that turn the current directory state into a target state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

TOMBSTONE_NAME_SEPARATOR = "_x000A_DEL:"
LAST_KNOWN_PARENT = "lastknownparent"


class DirectoryObjectLike(Protocol):
    """What the comparison needs to know about an exported directory object."""

    dn: str
    hash: Any
    is_deleted: bool
    name: Optional[str]
    attributes: Mapping[str, Sequence[str]]


class ActionType(Enum):
    """What has to happen to an object."""

    CREATE = "Create"
    REANIMATE = "Reanimate"
    MODIFY = "Modify"
    DELETE = "Delete"


@dataclass
class RemediationAction:
    """One step towards the target state for a single object."""

    action: ActionType
    target: Optional[Any] = None
    current: Optional[Any] = None
    last_known_parent: Optional[str] = None


def _last_known_parent(obj: Any) -> Optional[str]:
    """First lastKnownParent value, whatever the case of the attribute name."""
    return next(
        (
            values[0]
            for key, values in obj.attributes.items()
            if key.lower() == LAST_KNOWN_PARENT and values
        ),
        None,
    )


def _compare_pair(current: Any, target: Any) -> Optional[RemediationAction]:
    if current is None:
        return RemediationAction(ActionType.CREATE, target=target)
    if target is None:
        return RemediationAction(ActionType.DELETE, current=current)
    if current.hash == target.hash:
        return None
    if current.is_deleted and not target.is_deleted:
        return RemediationAction(ActionType.REANIMATE, target=target, current=current)
    if not current.is_deleted and target.is_deleted:
        return RemediationAction(
            ActionType.DELETE,
            target=target,
            current=current,
            last_known_parent=_last_known_parent(target),
        )
    return RemediationAction(ActionType.MODIFY, target=target, current=current)


def compare_states(
    current: Iterable[DirectoryObjectLike], target: Iterable[DirectoryObjectLike]
) -> dict[str, list[RemediationAction]]:
    """Group the required actions by DN.

    Objects only in the target are created, objects only in the current
    state are deleted, and objects present in both with differing hashes
    are reanimated, deleted or modified depending on their tombstone flags.
    """
    current_map = {obj.dn: obj for obj in current}
    target_map = {obj.dn: obj for obj in target}
    actions: dict[str, list[RemediationAction]] = {}
    for dn in dict.fromkeys([*current_map, *target_map]):
        action = _compare_pair(current_map.get(dn), target_map.get(dn))
        if action is not None:
            actions.setdefault(dn, []).append(action)
    return {
        dn: _sort_actions(_reconcile_tombstones(acts)) for dn, acts in actions.items()
    }


def _dn_depth(obj: Any) -> int:
    return 0 if obj is None else obj.dn.count(",")


def _sort_actions(actions: Sequence[RemediationAction]) -> list[RemediationAction]:
    """Creates parents first, then reanimations, modifications, and deletes children first."""
    by_type = {
        kind: [action for action in actions if action.action is kind]
        for kind in ActionType
    }
    creates = sorted(by_type[ActionType.CREATE], key=lambda a: _dn_depth(a.target))
    deletes = sorted(by_type[ActionType.DELETE], key=lambda a: _dn_depth(a.current))
    deletes.reverse()
    return [
        *creates,
        *by_type[ActionType.REANIMATE],
        *by_type[ActionType.MODIFY],
        *deletes,
    ]


def _reconcile_tombstones(
    actions: Sequence[RemediationAction],
) -> list[RemediationAction]:
    """Merge tombstone creations with matching parentless deletes.

    A tombstone in the target whose original name matches a live object
    without parent information becomes a single delete carrying the
    tombstone's last known parent. Tombstones left unmatched are dropped:
    the object is already gone.
    """
    result = list(actions)
    unmatched = [
        action
        for action in result
        if action.action is ActionType.CREATE
        and action.target is not None
        and action.target.is_deleted
    ]
    parentless = [
        action
        for action in result
        if action.action is ActionType.DELETE and action.last_known_parent is None
    ]
    for tombstone in unmatched:
        target = tombstone.target
        cn = (target.name or "").split(TOMBSTONE_NAME_SEPARATOR)[0].lower()
        index = next(
            (
                position
                for position, delete in enumerate(parentless)
                if delete.current is not None
                and delete.current.name is not None
                and delete.current.name.lower() == cn
            ),
            None,
        )
        if index is None:
            continue
        matching = parentless.pop(index)
        result = [
            action for action in result if action != tombstone and action != matching
        ]
        result.append(
            RemediationAction(
                ActionType.DELETE,
                target=target,
                current=matching.current,
                last_known_parent=_last_known_parent(target),
            )
        )
    return [action for action in result if action not in unmatched]