"""
Driver loop: ticks the scheduler at a fixed interval.
"""

from __future__ import annotations

import sys
import threading
import traceback
from typing import Optional

from tickwork.core.actions.runner import ActionManager
from tickwork.core.queue import MonoQueue


class TickLoop:
    """
    Calls manager.tick() every `interval_ms`, under `gate`.
    Either synchronously (run) or on a daemon thread (start/stop).
    """

    def __init__(self, manager: ActionManager, interval_ms: int = 10, gate: Optional[MonoQueue] = None) -> None:
        self.manager = manager
        self.interval_ms = max(1, int(interval_ms))
        self.gate = gate or MonoQueue()
        self.ticks = 0
        self.error: Optional[BaseException] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def tick_once(self) -> None:
        self.gate.run(self.manager.tick)
        self.ticks += 1

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Tick until stop() or `max_ticks`; returns the number of ticks done."""
        done = 0
        while not self._stop.is_set():
            if max_ticks is not None and done >= max_ticks:
                break
            self.tick_once()
            done += 1
            if max_ticks is None or done < max_ticks:
                self._stop.wait(self.interval_ms / 1000.0)
        return done

    def _run_guarded(self) -> None:
        try:
            self.run()
        except Exception as exc:
            self.error = exc
            sys.stderr.write(f"[tickwork] ERROR: tick loop stopped: {exc}\n")
            traceback.print_exc()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            if not self._stop.is_set():
                return
            # a stop() is pending; let the old thread finish first
            self._thread.join()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run_guarded, name="tickwork-loop", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
