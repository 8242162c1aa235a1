import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
EXAMPLE = ROOT / "tools" / "examples" / "blink_actions.json"


def _run(req):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT / "src"), env.get("PYTHONPATH")]))
    p = subprocess.Popen(
        [sys.executable, "-m", "tickwork.server.stdio", "--actions", str(EXAMPLE), "--tick-ms", "5"],
        cwd=str(ROOT),
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        env=env,
    )
    try:
        p.stdin.write(json.dumps(req) + "\n")
        p.stdin.flush()
        line = p.stdout.readline().strip()
        assert line, "no response"
        return json.loads(line)
    finally:
        p.kill()
        p.wait(timeout=5)


def test_initialize():
    r = _run({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"clientInfo": {"name": "pytest"}}})
    assert r["id"] == 1
    assert r["result"]["serverInfo"]["name"] == "tickwork"


def test_status_reports_running_scheduler():
    r = _run({"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "tickwork.status"}})
    env = r["result"]["content"][0]["json"]
    assert env["operation"] == "tickwork.status"
    assert env["scheduler_state"]["running"] is True
    assert env["scheduler_state"]["root"] == "main"
