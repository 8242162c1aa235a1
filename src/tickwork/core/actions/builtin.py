"""
Built-in actions: pause, sequence, repeat.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .base import Action
from .models import COMPLETED, Result


class PauseAction(Action):
    """
    Wait `duration` ms, then complete. Always takes two process() calls,
    including for a zero duration.
    """

    def __init__(self, duration: int, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.duration = int(duration)

    def process(self) -> Result:
        if self.started:
            self.started = False
            return COMPLETED
        self.started = True
        return Result.step(self.duration)


class SequenceAction(Action):
    """
    Delegate to each sub-action in order, resuming `pause_between` ms after
    each one completes.
    """

    def __init__(
        self,
        actions: Sequence[Action] = (),
        pause_between: int = 0,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(name)
        self.actions: List[Action] = list(actions)
        self.pause_between = int(pause_between)
        self.index = 0

    def set_actions(self, actions: Sequence[Action], pause_between: int) -> None:
        self.actions = list(actions)
        self.pause_between = int(pause_between)

    def process(self) -> Result:
        if not self.started:
            self.index = 0
            self.started = True
        if self.index >= len(self.actions):
            self.started = False
            return COMPLETED
        nested = self.actions[self.index]
        self.index += 1
        return Result.delegate(nested, self.pause_between)

    def advance(self) -> None:
        """Skip the cursor one step forward, wrapping to the first step."""
        self.index += 1
        if self.index >= len(self.actions):
            self.index = 0


class RepeatAction(Action):
    """
    Delegate to the same wrapped action `repeat` times, resuming `pause_after`
    ms after each repetition.
    """

    def __init__(
        self,
        action: Action,
        repeat: int,
        pause_after: int = 0,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(name)
        self.action = action
        self.repeat = int(repeat)
        self.pause_after = int(pause_after)
        self.index = 0

    def process(self) -> Result:
        if not self.started:
            self.index = 0
            self.started = True
        if self.index < self.repeat:
            self.index += 1
            return Result.delegate(self.action, self.pause_after)
        self.started = False
        return COMPLETED
