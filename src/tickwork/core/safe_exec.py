"""
Safe execution wrapper that guarantees structured envelopes.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from . import envelope


def _safe_state(state_provider: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    try:
        return state_provider()
    except Exception:
        return {"warning": "scheduler snapshot failed"}


def safe_execute(
    operation: str,
    func: Callable[[], Dict[str, Any]],
    state_provider: Callable[[], Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Executes a control operation, wrapping all errors into envelopes.
    """
    started = envelope._now_ms()
    try:
        result = func() or {}
        return envelope.build_envelope(
            operation=operation,
            status=result.get("status", "ok"),
            data=result.get("data"),
            scheduler_state=_safe_state(state_provider),
            metrics=result.get("metrics"),
            error=result.get("error"),
            started_ms=started,
        )
    except Exception as exc:
        return envelope.build_envelope(
            operation=operation,
            status="error",
            scheduler_state=_safe_state(state_provider),
            error=envelope.build_error(
                code="internal_error",
                message=str(exc),
                recoverable=False,
            ),
            started_ms=started,
        )
