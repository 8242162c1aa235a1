"""
Envelope builders for control-surface responses.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional


def _now_ms() -> int:
    return int(time.perf_counter() * 1000)


def build_error(
    code: str,
    message: str,
    recoverable: bool = True,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    error: Dict[str, Any] = {
        "code": code,
        "message": message,
        "recoverable": recoverable,
    }
    if details:
        error["details"] = details
    return error


def build_envelope(
    *,
    operation: str,
    status: str = "ok",
    data: Optional[Dict[str, Any]] = None,
    scheduler_state: Optional[Dict[str, Any]] = None,
    metrics: Optional[Dict[str, Any]] = None,
    error: Optional[Dict[str, Any]] = None,
    started_ms: Optional[int] = None,
) -> Dict[str, Any]:
    envelope: Dict[str, Any] = {
        "status": status,
        "operation": operation,
        "scheduler_state": scheduler_state or {},
    }
    if data is not None:
        envelope["data"] = data

    if started_ms is not None:
        duration_ms = max(0, _now_ms() - started_ms)
        metrics = {"duration_ms": duration_ms, **(metrics or {})}
    if metrics:
        envelope["metrics"] = metrics

    if error:
        envelope["error"] = error
    return envelope
