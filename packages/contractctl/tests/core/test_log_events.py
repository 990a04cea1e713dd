from __future__ import annotations

import json

import pytest

from contractctl.core.context import RunContext
from contractctl.core.logging import log_event


def test_text_events_are_key_value_lines(capsys: pytest.CaptureFixture[str]) -> None:
    log_event(RunContext(run_id="r1", profile="test"), "info", "verify", "done", errors=2, status="fail")
    line = capsys.readouterr().err.strip()
    assert "level=info run_id=r1 component=verify action=done" in line
    assert line.endswith("errors=2 status=fail")


def test_json_events(capsys: pytest.CaptureFixture[str]) -> None:
    log_event(RunContext(run_id="r1", profile="test", log_json=True), "warn", "cli", "start", cmd="verify")
    payload = json.loads(capsys.readouterr().err)
    assert payload["level"] == "warn"
    assert payload["cmd"] == "verify"
    assert payload["file"].endswith("test_log_events.py")


def test_levels_follow_verbosity(capsys: pytest.CaptureFixture[str]) -> None:
    log_event(RunContext(run_id="r1", profile="test"), "debug", "x", "hidden")
    log_event(RunContext(run_id="r1", profile="test", quiet=True), "info", "x", "hidden")
    log_event(None, "error", "x", "hidden")
    assert capsys.readouterr().err == ""
    log_event(RunContext(run_id="r1", profile="test", verbose=True), "debug", "x", "shown")
    log_event(RunContext(run_id="r1", profile="test", quiet=True), "error", "x", "shown")
    assert capsys.readouterr().err.count("action=shown") == 2
