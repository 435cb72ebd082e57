from __future__ import annotations

from pathlib import Path

import pytest

from scripts_runner import runner
from scripts_runner.errors import ScriptExecutionError
from scripts_runner.models import ScriptRecord


class FakeProcess:
    def wait(self) -> int:
        return 0


def test_run_script_uses_shell(monkeypatch) -> None:
    calls = []

    def fake_popen(command, shell, cwd):
        calls.append((command, shell, cwd))
        return FakeProcess()

    monkeypatch.setattr(runner.subprocess, "Popen", fake_popen)

    process = runner.run_script("build", "make all")

    assert isinstance(process, FakeProcess)
    assert calls == [("make all", True, None)]


def test_run_record_uses_project_directory(tmp_path: Path, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(
        runner.subprocess,
        "Popen",
        lambda command, shell, cwd: calls.append(cwd) or FakeProcess(),
    )

    runner.run_record(ScriptRecord(name="a", command="ls", project_path=tmp_path))
    runner.run_record(ScriptRecord(name="b", command="ls", project_path=tmp_path / "gone"))

    assert calls == [str(tmp_path), None]


def test_run_script_wraps_start_failures(monkeypatch) -> None:
    def failing_popen(command, shell, cwd):
        raise FileNotFoundError("no shell")

    monkeypatch.setattr(runner.subprocess, "Popen", failing_popen)

    with pytest.raises(ScriptExecutionError):
        runner.run_script("build", "make")
