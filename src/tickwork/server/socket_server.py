"""
WebSocket control surface.
- One JSON message per text frame, dispatched through server.core.handle
- No tool knowledge here
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import traceback
from typing import Any, Dict, Optional, Sequence

import websockets
from websockets.exceptions import ConnectionClosed

from tickwork.server import settings
from tickwork.server.core import Runtime, ToolRegistry, build_runtime, handle

# -------------------------
# Helpers JSON strict
# -------------------------

def _json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False)


def _error(code: str, message: str, details: Optional[Dict[str, Any]] = None):
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
    }

# -------------------------
# Message Handling
# -------------------------

async def handle_message(raw: str, tools: ToolRegistry) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except ValueError:
        return _error("invalid_json", "Payload is not valid JSON")
    try:
        return handle(data, tools)
    except Exception as exc:
        traceback.print_exc()
        return _error(
            "internal_error",
            "Unhandled exception in socket transport",
            {"exception": str(exc)},
        )

# -------------------------
# WebSocket Server
# -------------------------

def _client_loop(tools: ToolRegistry):
    async def _loop(ws):
        try:
            async for raw in ws:
                result = await handle_message(raw, tools)
                await ws.send(_json_dumps(result))
        except (ConnectionResetError, OSError, ConnectionClosed):
            # Client dropped the connection.
            return

    return _loop


async def serve_socket(runtime: Runtime, host: str = "127.0.0.1", port: int = settings.DEFAULT_PORT):
    """
    Start the WebSocket control server and the tick loop; runs until cancelled.
    """
    runtime.loop.start()
    try:
        async with websockets.serve(_client_loop(runtime.tools), host, port):
            sys.stderr.write(f"[tickwork] socket control listening on ws://{host}:{port}\n")
            sys.stderr.flush()
            await asyncio.Future()  # run forever
    finally:
        runtime.loop.stop()

# -------------------------
# CLI
# -------------------------

def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Run an action document with a WebSocket control surface.")
    ap.add_argument("--actions", default=settings.actions_path())
    ap.add_argument("--tick-ms", type=int, default=settings.tick_ms())
    ap.add_argument("--no-repeat", dest="repeat", action="store_false", default=settings.repeat())
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=settings.port())
    args = ap.parse_args(argv)

    runtime = build_runtime(args.actions, repeat=args.repeat, tick_ms=args.tick_ms)
    try:
        asyncio.run(serve_socket(runtime, args.host, args.port))
    except KeyboardInterrupt:
        sys.stderr.write("[tickwork] socket control stopped\n")


if __name__ == "__main__":
    main()
