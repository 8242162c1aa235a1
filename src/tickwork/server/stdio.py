"""
JSON-RPC 2.0 control surface over stdin/stdout.

    python -m tickwork.server.stdio --actions actions.json

The scheduler runs on a background TickLoop; stdout carries protocol lines
only, logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from typing import Any, Optional, Sequence

from tickwork.server import settings
from tickwork.server.core import JSON, ControlError, Runtime, ToolRegistry, build_runtime

SERVER_INFO = {"name": "tickwork", "version": "0.1.0"}


def _write(msg: JSON) -> None:
    sys.stdout.write(json.dumps(msg, ensure_ascii=False) + "\n")
    sys.stdout.flush()


def _err_to_json(exc: BaseException) -> JSON:
    if isinstance(exc, ControlError):
        return {
            "code": exc.code,
            "message": exc.message,
            "data": exc.data,
        }
    return {
        "code": "internal_error",
        "message": str(exc),
        "data": {
            "type": type(exc).__name__,
            "traceback": traceback.format_exc(limit=20),
        },
    }


def handle_request(req: Any, reg: ToolRegistry) -> Optional[JSON]:
    if not isinstance(req, dict) or req.get("jsonrpc") != "2.0":
        raise ControlError(code="invalid_request", message="jsonrpc must be '2.0'")

    req_id = req.get("id", None)
    method = req.get("method")

    # Notifications: id may be omitted
    def result(payload: Any) -> Optional[JSON]:
        if req_id is None:
            return None
        return {"jsonrpc": "2.0", "id": req_id, "result": payload}

    if method == "initialize":
        params = req.get("params") or {}
        return result(
            {
                "protocolVersion": "0.1",
                "serverInfo": SERVER_INFO,
                "capabilities": {"tools": True},
                "client": params.get("clientInfo", {}),
            }
        )

    if method == "tools/list":
        return result({"tools": reg.list_specs()})

    if method == "tools/call":
        params = req.get("params") or {}
        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(name, str) or not name:
            raise ControlError(code="invalid_params", message="tools/call requires params.name (string)")
        out = reg.call(name=name, arguments=arguments)
        return result({"content": [{"type": "json", "json": out}]})

    raise ControlError(code="method_not_found", message=f"Unknown method: {method}")


def serve_stdio(runtime: Runtime, stdin=None) -> None:
    runtime.loop.start()
    sys.stderr.write(f"[tickwork] stdio control ready ({runtime.loop.interval_ms} ms tick)\n")
    sys.stderr.flush()
    try:
        for line in stdin or sys.stdin:
            line = line.strip()
            if not line:
                continue
            req: Any = None
            try:
                req = json.loads(line)
                resp = handle_request(req, runtime.tools)
                if resp is not None:
                    _write(resp)
            except Exception as exc:
                req_id = req.get("id", None) if isinstance(req, dict) else None
                _write({"jsonrpc": "2.0", "id": req_id, "error": _err_to_json(exc)})
    finally:
        runtime.loop.stop()
        runtime.loop.join(timeout=1.0)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run an action document and accept control commands.")
    ap.add_argument("--actions", default=settings.actions_path(), help="Action document (JSON)")
    ap.add_argument("--tick-ms", type=int, default=settings.tick_ms(), help="Driver interval in ms")
    ap.add_argument(
        "--no-repeat",
        dest="repeat",
        action="store_false",
        default=settings.repeat(),
        help="Stop once the main sequence completes",
    )
    return ap


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    runtime = build_runtime(args.actions, repeat=args.repeat, tick_ms=args.tick_ms)
    serve_stdio(runtime)


if __name__ == "__main__":
    main()
