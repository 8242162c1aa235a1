"""
Build an action graph from a JSON action document.

    {"actions": [{"id": "blink", "type": "Pause", "settings": {"pause": 500}},
                 {"id": "main", "type": "Sequence",
                  "settings": {"actions": ["blink"], "pause": 0}}]}

Entries are built in document order and may only reference ids defined
before them. Bad entries are reported on stderr and dropped; nothing here
raises on a malformed document.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from tickwork.core.actions import registry
from tickwork.core.actions.base import Action
from tickwork.core.actions.builtin import PauseAction, RepeatAction, SequenceAction
from tickwork.core.actions.registry import ActionFactory
from tickwork.core.coerce import to_count, to_millis, to_name

MAIN_ID = "main"


def _warn(message: str) -> None:
    sys.stderr.write(f"[tickwork] WARNING: {message}\n")
    sys.stderr.flush()


def _pause(settings: Mapping[str, Any], built: Dict[str, Action]) -> PauseAction:
    return PauseAction(to_millis(settings.get("pause")))


def _repeat(settings: Mapping[str, Any], built: Dict[str, Action]) -> Optional[RepeatAction]:
    target_id = to_name(settings.get("actionID"))
    target = built.get(target_id)
    if target is None:
        _warn(f"Repeat references unknown action: {target_id}")
        return None
    return RepeatAction(target, to_count(settings.get("nTimes")), to_millis(settings.get("pause")))


def _sequence(settings: Mapping[str, Any], built: Dict[str, Action]) -> Optional[SequenceAction]:
    names = settings.get("actions") or []
    if not isinstance(names, list):
        names = []
    targets = [built[to_name(n)] for n in names if to_name(n) in built]
    if not targets:
        _warn("Sequence with no actions")
        return None
    return SequenceAction(targets, to_millis(settings.get("pause")))


_BUILTINS = {
    "pause": _pause,
    "repeat": _repeat,
    "sequence": _sequence,
}


def _build(kind: str, settings: Mapping[str, Any], built: Dict[str, Action], factory: ActionFactory) -> Optional[Action]:
    builder = _BUILTINS.get(kind.lower())
    if builder is not None:
        return builder(settings, built)
    return factory(kind, settings)


def from_json(doc: Any, factory: Optional[ActionFactory] = None) -> Optional[SequenceAction]:
    """
    Build every entry of `doc["actions"]` and return the one with id "main".
    Types other than Pause/Repeat/Sequence go to `factory` (default: the
    kind registry).
    """
    factory = factory or registry.factory
    if not isinstance(doc, Mapping) or not isinstance(doc.get("actions"), list):
        _warn("Action document has no 'actions' list")
        return None

    built: Dict[str, Action] = {}
    for entry in doc["actions"]:
        if not isinstance(entry, Mapping):
            _warn(f"Skipping malformed action entry: {entry!r}")
            continue
        kind = to_name(entry.get("type"))
        action_id = to_name(entry.get("id"))
        settings = entry.get("settings")
        if not isinstance(settings, Mapping):
            settings = {}

        action = _build(kind, settings, built, factory)
        if action is None:
            if kind.lower() not in _BUILTINS:
                _warn(f"Unknown action type: {kind}")
        elif action_id == MAIN_ID and kind.lower() != "sequence":
            _warn(f"Main action must be a Sequence, but is {kind}")
        else:
            action.name = action_id or None
            built[action_id] = action

    main = built.get(MAIN_ID)
    return main if isinstance(main, SequenceAction) else None


def from_file(path: Union[str, Path], factory: Optional[ActionFactory] = None) -> Optional[SequenceAction]:
    p = Path(path)
    if not p.is_file():
        _warn(f"No action file was found: {p}")
        return None
    try:
        doc = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _warn(f"Error parsing actions: {exc}")
        return None
    return from_json(doc, factory)
