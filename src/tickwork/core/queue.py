"""
Single-caller execution gate for the scheduler.
"""

from __future__ import annotations

import threading
from typing import Callable, TypeVar

T = TypeVar("T")


class MonoQueue:
    """
    Guards scheduler access with a single lock so the driver loop's ticks and
    control commands (pause/resume/advance) never interleave.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def run(self, func: Callable[..., T], *args, **kwargs) -> T:
        with self._lock:
            return func(*args, **kwargs)
