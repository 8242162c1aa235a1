from tickwork.core import envelope
from tickwork.core.safe_exec import safe_execute


def test_build_error():
    err = envelope.build_error("not_found", "gone", recoverable=False)
    assert err == {"code": "not_found", "message": "gone", "recoverable": False}
    assert envelope.build_error("x", "y", details={"k": 1})["details"] == {"k": 1}


def test_build_envelope_omits_empty_fields():
    env = envelope.build_envelope(operation="tickwork.status")
    assert env == {"status": "ok", "operation": "tickwork.status", "scheduler_state": {}}


def test_safe_execute_success():
    env = safe_execute("op", lambda: {"status": "ok", "data": {"a": 1}}, lambda: {"paused": False})
    assert env["status"] == "ok"
    assert env["data"] == {"a": 1}
    assert env["scheduler_state"] == {"paused": False}
    assert env["metrics"]["duration_ms"] >= 0


def test_safe_execute_wraps_errors():
    def fail():
        raise ValueError("nope")

    def broken_state():
        raise RuntimeError("no state")

    env = safe_execute("op", fail, broken_state)
    assert env["status"] == "error"
    assert env["error"]["code"] == "internal_error"
    assert env["error"]["message"] == "nope"
    assert "warning" in env["scheduler_state"]
