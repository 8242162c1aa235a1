"""
Core action models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .base import Action


@dataclass(frozen=True)
class Result:
    """
    Outcome of one Action.process() call.
    - Step: nested is None, pause >= 0 -> call again no sooner than now + pause
    - Delegate: nested is set -> run nested first, resume this action after `pause` ms
    - Completed: nested is None, pause < 0 (see COMPLETED)
    """
    pause: int = 0
    nested: Optional["Action"] = None

    @classmethod
    def step(cls, pause: int) -> "Result":
        return cls(pause=max(0, int(pause)))

    @classmethod
    def delegate(cls, nested: "Action", pause: int = 0) -> "Result":
        return cls(pause=max(0, int(pause)), nested=nested)

    @property
    def delegates(self) -> bool:
        return self.nested is not None

    @property
    def completed(self) -> bool:
        return self.nested is None and self.pause < 0


COMPLETED = Result(pause=-1)


@dataclass(frozen=True)
class SuspendedAction:
    """
    Suspension stack frame: an action waiting on a nested one, and the delay
    to apply before it is resumed. The empty frame (action=None) is what
    popping an empty stack yields.
    """
    action: Optional["Action"] = None
    resume_after: int = 0
