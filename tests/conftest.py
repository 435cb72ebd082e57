from __future__ import annotations

import json
from pathlib import Path

import pytest

from scripts_runner.models import WorkspaceRoot


def _write_scripts(directory: Path, scripts, *, wrapped: bool = True) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    payload = {"scripts": scripts} if wrapped else scripts
    path = directory / ".scriptsrc"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _read_scripts(path: Path) -> list[dict]:
    return json.loads(path.read_text(encoding="utf-8"))["scripts"]


def _root_for(path: Path) -> WorkspaceRoot:
    path.mkdir(parents=True, exist_ok=True)
    return WorkspaceRoot(path=path, name=path.name)


@pytest.fixture
def write_scripts():
    return _write_scripts


@pytest.fixture
def read_scripts():
    return _read_scripts


@pytest.fixture
def root_for():
    return _root_for
