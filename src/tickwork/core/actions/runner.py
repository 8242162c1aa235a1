"""
Action runner: the tick-driven scheduler.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from tickwork.core.clock import Clock, millis

from .base import Action
from .builtin import SequenceAction
from .models import SuspendedAction


class ActionManager:
    """
    Advances one action per tick.

    Nested delegation is kept on an explicit stack of SuspendedAction frames,
    root first. The stack never holds the current action. All waiting is a
    time gate (`not_before`); tick() never blocks.

    Ticks must come from one caller at a time (see core.queue.MonoQueue).
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or millis
        self._current: Optional[Action] = None
        self._root: Optional[SequenceAction] = None
        self._repeat = False
        self._not_before = 0
        self._paused = False
        self._stack: List[SuspendedAction] = []

    # ---------------------------
    # Embedding API
    # ---------------------------

    def begin(self, root: Optional[SequenceAction], repeat: bool = False) -> None:
        self._current = self._root = root
        self._repeat = bool(repeat)
        self._not_before = 0
        self._stack.clear()

    def tick(self) -> None:
        if self._paused:
            return
        now = self._clock()
        if now < self._not_before:
            return

        if self._current is None:
            frame = self._pop()
            if frame.action is not None:
                self._current = frame.action
                self._not_before = now + frame.resume_after
            elif self._repeat and self._root is not None:
                self._current = self._root
                self._not_before = now
            return

        result = self._current.process()
        if result.nested is not None:
            self._stack.append(SuspendedAction(self._current, result.pause))
            self._current = result.nested
            self._not_before = now
        elif result.pause < 0:
            self._current = None
            self._not_before = now
        else:
            self._not_before = now + result.pause

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def advance_main_sequence(self) -> None:
        """
        Abandon whatever nested work is in flight and skip the root sequence
        one step forward. Every action between the current one and the root
        is halted; the stack ends up empty and the root becomes current.

        If the chain runs out without reaching the root (the root already
        completed), only the cursor moves and the manager stays idle; tick()
        then restarts the root or not according to `repeat`.

        The cursor only sticks while the root is started: right after begin()
        or a repeat restart, the root's next process() resets it to the first
        step, so the skip has no effect.
        """
        if self._root is None:
            return
        if self._current is None:
            self._current = self._pop().action
        while self._current is not None and self._current is not self._root:
            self._current.halt()
            self._current = self._pop().action
        self._stack.clear()
        if self._current is not None:
            self._not_before = self._clock()
        self._root.advance()

    # ---------------------------
    # Introspection
    # ---------------------------

    @property
    def current(self) -> Optional[Action]:
        return self._current

    @property
    def root(self) -> Optional[SequenceAction]:
        return self._root

    @property
    def repeat(self) -> bool:
        return self._repeat

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def not_before(self) -> int:
        return self._not_before

    @property
    def depth(self) -> int:
        return len(self._stack)

    def suspended(self) -> List[SuspendedAction]:
        """Copy of the suspension stack, root side first."""
        return list(self._stack)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "running": self._root is not None,
            "paused": self._paused,
            "repeat": self._repeat,
            "current": _label(self._current),
            "root": _label(self._root),
            "depth": len(self._stack),
            "not_before_ms": self._not_before,
            "now_ms": self._clock(),
        }

    def _pop(self) -> SuspendedAction:
        if self._stack:
            return self._stack.pop()
        return SuspendedAction()


def _label(action: Optional[Action]) -> Optional[str]:
    if action is None:
        return None
    return action.name or type(action).__name__
