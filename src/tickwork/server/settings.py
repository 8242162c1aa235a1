"""
Environment-backed defaults; command-line flags override them.
"""

from __future__ import annotations

import os

from tickwork.core.coerce import to_bool, to_count

DEFAULT_ACTIONS = "actions.json"
DEFAULT_TICK_MS = 10
DEFAULT_PORT = 8765


def actions_path() -> str:
    return os.environ.get("TICKWORK_ACTIONS") or DEFAULT_ACTIONS


def tick_ms() -> int:
    return to_count(os.environ.get("TICKWORK_TICK_MS"), DEFAULT_TICK_MS) or DEFAULT_TICK_MS


def repeat() -> bool:
    return to_bool(os.environ.get("TICKWORK_REPEAT"), True)


def port() -> int:
    return to_count(os.environ.get("TICKWORK_PORT"), DEFAULT_PORT) or DEFAULT_PORT
