"""
Millisecond clock used for scheduling deadlines.
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def millis() -> int:
    return int(time.monotonic() * 1000)
