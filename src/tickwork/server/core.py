"""
Control tools for a running scheduler, shared by the stdio and socket
transports.
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from tickwork.core.actions import registry as kinds
from tickwork.core.actions.registry import ActionFactory
from tickwork.core.actions.runner import ActionManager
from tickwork.core.clock import Clock
from tickwork.core.queue import MonoQueue
from tickwork.core.reader import from_file
from tickwork.core.safe_exec import safe_execute
from tickwork.server.loop import TickLoop

JSON = Dict[str, Any]


class ControlError(RuntimeError):
    def __init__(self, code: str, message: str, data: Optional[JSON] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data or {}


@dataclass
class ToolSpec:
    name: str
    description: str
    input_schema: JSON


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: Dict[str, ToolSpec] = {}
        self._handlers: Dict[str, Callable[[JSON], Any]] = {}

    def register(self, spec: ToolSpec, handler: Callable[[JSON], Any]) -> None:
        self._tools[spec.name] = spec
        self._handlers[spec.name] = handler

    def names(self) -> List[str]:
        return sorted(self._tools)

    def list_specs(self) -> List[JSON]:
        return [
            {
                "name": t.name,
                "description": t.description,
                "inputSchema": t.input_schema,
            }
            for t in sorted(self._tools.values(), key=lambda x: x.name)
        ]

    def call(self, name: str, arguments: Optional[JSON]) -> Any:
        if name not in self._handlers:
            raise ControlError(code="tool_not_found", message=f"Unknown tool: {name}")
        return self._handlers[name](arguments or {})


_NO_ARGS: JSON = {"type": "object", "properties": {}, "additionalProperties": False}


def make_registry(manager: ActionManager, gate: MonoQueue) -> ToolRegistry:
    """Tools bound to one manager; every scheduler access goes through `gate`."""
    reg = ToolRegistry()

    def state() -> JSON:
        return gate.run(manager.snapshot)

    def command(operation: str, func: Callable[[], None]) -> Callable[[JSON], JSON]:
        def _op() -> JSON:
            gate.run(func)
            return {"status": "ok"}

        return lambda _args: safe_execute(operation, _op, state)

    reg.register(
        ToolSpec(name="tickwork.ping", description="Health check tool; returns pong.", input_schema=_NO_ARGS),
        lambda args: {"pong": True},
    )
    reg.register(
        ToolSpec(name="tickwork.status", description="Snapshot of the scheduler state.", input_schema=_NO_ARGS),
        lambda args: safe_execute("tickwork.status", lambda: {"status": "ok"}, state),
    )
    reg.register(
        ToolSpec(name="tickwork.pause", description="Freeze all scheduling progress.", input_schema=_NO_ARGS),
        command("tickwork.pause", manager.pause),
    )
    reg.register(
        ToolSpec(name="tickwork.resume", description="Resume scheduling after a pause.", input_schema=_NO_ARGS),
        command("tickwork.resume", manager.resume),
    )
    reg.register(
        ToolSpec(
            name="tickwork.advance",
            description="Abandon nested work and skip the main sequence to its next step.",
            input_schema=_NO_ARGS,
        ),
        command("tickwork.advance", manager.advance_main_sequence),
    )
    reg.register(
        ToolSpec(name="tickwork.kinds", description="List application-defined action kinds.", input_schema=_NO_ARGS),
        lambda args: safe_execute(
            "tickwork.kinds",
            lambda: {"status": "ok", "data": {"kinds": kinds.list_kinds()}},
            state,
        ),
    )
    return reg


@dataclass
class Runtime:
    """One embedded scheduler: owned by the process entry point, not global."""
    manager: ActionManager
    gate: MonoQueue
    loop: TickLoop
    tools: ToolRegistry


def build_runtime(
    actions: Union[str, Path, None],
    *,
    repeat: bool = True,
    tick_ms: int = 10,
    factory: Optional[ActionFactory] = None,
    clock: Optional[Clock] = None,
) -> Runtime:
    manager = ActionManager(clock=clock)
    if actions is not None:
        root = from_file(actions, factory)
        if root is None:
            sys.stderr.write(f"[tickwork] WARNING: no 'main' sequence in {actions}; scheduler is idle\n")
        manager.begin(root, repeat)
    gate = MonoQueue()
    return Runtime(
        manager=manager,
        gate=gate,
        loop=TickLoop(manager, tick_ms, gate),
        tools=make_registry(manager, gate),
    )


def _error(code: str, message: str, details: Optional[JSON] = None) -> JSON:
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
    }


def handle(message: Any, tools: ToolRegistry) -> JSON:
    """
    Transport-neutral dispatch:
      {"type": "tools/list"}
      {"type": "tools/call", "name": ..., "args": {...}}
    """
    if not isinstance(message, dict):
        return _error("invalid_request", "Message must be a JSON object")

    kind = message.get("type")
    if kind == "tools/list":
        return {"ok": True, "result": {"tools": tools.list_specs()}}
    if kind != "tools/call":
        return _error("invalid_request", f"Unknown message type: {kind}")

    name = message.get("name")
    if not isinstance(name, str) or name not in tools.names():
        return _error("unknown_tool", f"Unknown tool: {name}")
    try:
        return {"ok": True, "result": tools.call(name, message.get("args") or {})}
    except ControlError as exc:
        return _error(exc.code, exc.message, exc.data)
    except Exception as exc:
        traceback.print_exc()
        return _error(
            "internal_error",
            "Unhandled exception in control tool",
            {"exception": str(exc)},
        )
