from __future__ import annotations

import logging
from pathlib import Path

from scripts_runner import config


def test_resolve_roots_defaults_to_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    (root,) = config.resolve_roots(None)

    assert root.path == tmp_path.resolve()
    assert root.name == tmp_path.resolve().name


def test_resolve_roots_keeps_order(tmp_path: Path) -> None:
    first = tmp_path / "b"
    second = tmp_path / "a"

    roots = config.resolve_roots([first, second])

    assert [root.name for root in roots] == ["b", "a"]


def test_ignored_directories() -> None:
    assert config.is_ignored_directory(".git")
    assert config.is_ignored_directory("node_modules")
    assert not config.is_ignored_directory("api")


def test_log_level_from_environment(monkeypatch) -> None:
    monkeypatch.setenv(config.LOG_LEVEL_ENV, "info")

    config.configure_logging(verbose=False)

    assert logging.getLogger().level == logging.INFO
