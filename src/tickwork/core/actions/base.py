"""
Action base interface.
"""

from __future__ import annotations

from typing import Optional

from .models import Result


class Action:
    """
    Minimal action contract: process() -> Result, halt() -> forget progress.

    `started` is False on the first visit (after construction or halt) and
    is owned by the concrete action: set it when initializing the cursor,
    clear it when returning COMPLETED.
    """

    name: Optional[str] = None

    def __init__(self, name: Optional[str] = None) -> None:
        self.started = False
        if name is not None:
            self.name = name

    def process(self) -> Result:
        raise NotImplementedError

    def halt(self) -> None:
        self.started = False

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label}>"
