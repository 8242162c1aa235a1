"""
Registry of application-defined action kinds.

Design:
- The scheduler only sees Action instances; it knows nothing about kinds.
- The reader resolves Pause/Repeat/Sequence itself and hands every other
  type to a factory. `factory()` is the default one, backed by this registry.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, Dict, Mapping, Optional

from tickwork.core.coerce import to_millis, to_name

from .base import Action
from .models import COMPLETED, Result

ActionFactory = Callable[[str, Mapping[str, Any]], Optional[Action]]
KindBuilder = Callable[[Mapping[str, Any]], Optional[Action]]


# ---------------------------
# Registry
# ---------------------------

_KINDS: Dict[str, KindBuilder] = {}


def register(kind: str, builder: KindBuilder) -> None:
    _KINDS[kind.lower()] = builder


def unregister(kind: str) -> None:
    _KINDS.pop(kind.lower(), None)


def get(kind: str) -> Optional[KindBuilder]:
    return _KINDS.get(kind.lower())


def list_kinds() -> Dict[str, str]:
    return {name: (getattr(builder, "__doc__", "") or "").strip() for name, builder in _KINDS.items()}


def factory(kind: str, settings: Mapping[str, Any]) -> Optional[Action]:
    builder = get(kind)
    if builder is None:
        return None
    return builder(settings)


# ---------------------------
# Built-in application kinds
# ---------------------------

class LogAction(Action):
    """
    Write one line to stderr, then hold for `hold` ms.
    Settings: message, hold
    """

    def __init__(self, message: str, hold: int = 0, stream=None) -> None:
        super().__init__()
        self.message = message
        self.hold = hold
        self.stream = stream

    def process(self) -> Result:
        if self.started:
            self.started = False
            return COMPLETED
        self.started = True
        out = self.stream or sys.stderr
        out.write(f"[tickwork] {self.message}\n")
        out.flush()
        return Result.step(self.hold)


def _build_log(settings: Mapping[str, Any]) -> LogAction:
    """Write a message to stderr. Settings: message, hold (ms)."""
    return LogAction(to_name(settings.get("message"), fallback=""), to_millis(settings.get("hold")))


# Register defaults at import time
register("Log", _build_log)
