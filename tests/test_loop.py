import time

from tickwork.core.actions.base import Action
from tickwork.core.actions.builtin import PauseAction, SequenceAction
from tickwork.core.actions.runner import ActionManager
from tickwork.server.loop import TickLoop


class Boom(Action):
    def process(self):
        raise RuntimeError("boom")


def test_run_bounded(clock):
    mgr = ActionManager(clock=clock)
    root = SequenceAction([PauseAction(0)])
    mgr.begin(root)
    loop = TickLoop(mgr, interval_ms=1)
    assert loop.run(max_ticks=5) == 5
    assert loop.ticks == 5
    assert mgr.current is None  # delegate, step, complete, resume parent, complete


def test_thread_start_stop():
    mgr = ActionManager()
    mgr.begin(SequenceAction([PauseAction(1)]), repeat=True)
    loop = TickLoop(mgr, interval_ms=1)
    loop.start()
    deadline = time.time() + 2.0
    while loop.ticks < 3 and time.time() < deadline:
        time.sleep(0.01)
    loop.stop()
    loop.join(timeout=2.0)
    assert loop.ticks >= 3
    assert not loop.alive
    assert loop.error is None


def test_thread_records_action_errors(capsys):
    mgr = ActionManager()
    mgr.begin(SequenceAction([Boom()]))
    loop = TickLoop(mgr, interval_ms=1)
    loop.start()
    loop.join(timeout=2.0)
    assert not loop.alive
    assert isinstance(loop.error, RuntimeError)
    assert "tick loop stopped: boom" in capsys.readouterr().err


def test_restart_right_after_stop():
    mgr = ActionManager()
    mgr.begin(SequenceAction([PauseAction(1)]), repeat=True)
    loop = TickLoop(mgr, interval_ms=1)
    loop.start()
    loop.stop()
    loop.start()
    try:
        assert loop.alive
        before = loop.ticks
        deadline = time.time() + 2.0
        while loop.ticks <= before + 2 and time.time() < deadline:
            time.sleep(0.01)
        assert loop.ticks > before + 2
        assert loop.alive
    finally:
        loop.stop()
        loop.join(timeout=2.0)
    assert not loop.alive


def test_start_twice_keeps_one_thread():
    mgr = ActionManager()
    mgr.begin(SequenceAction([PauseAction(1)]), repeat=True)
    loop = TickLoop(mgr, interval_ms=1)
    loop.start()
    first = loop._thread
    loop.start()
    try:
        assert loop._thread is first
    finally:
        loop.stop()
        loop.join(timeout=2.0)
