"""Configuration helpers for Scripts Runner."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from rich.logging import RichHandler

if TYPE_CHECKING:
    from .models import WorkspaceRoot

APP_NAME = "ScriptsRunner"

CONFIG_FILENAME = ".scriptsrc"
DEFAULT_CATEGORY = "General"

# Dependency caches are never treated as projects.
IGNORED_DIRECTORIES = frozenset({"node_modules"})

DEFAULT_SCRIPTS = [
    {
        "name": "ejemplo",
        "command": "echo 'Hola Mundo'",
        "description": "Script de ejemplo",
    }
]

DEFAULT_WATCH_INTERVAL = 2.0

LOG_LEVEL_ENV = "SCRIPTS_RUNNER_LOG_LEVEL"


def is_ignored_directory(name: str) -> bool:
    """Return ``True`` for directory names skipped by discovery and watching."""

    return name.startswith(".") or name in IGNORED_DIRECTORIES


def resolve_roots(paths: Optional[Iterable[Path]] = None) -> list[WorkspaceRoot]:
    """Turn user supplied paths into workspace roots.

    When no path is given the current working directory is the only root. The
    order of ``paths`` is kept because discovery depends on it.
    """

    from .models import WorkspaceRoot

    candidates = list(paths) if paths else [Path.cwd()]
    roots: list[WorkspaceRoot] = []
    for candidate in candidates:
        resolved = candidate.expanduser().resolve()
        roots.append(WorkspaceRoot(path=resolved, name=resolved.name))
    return roots


def configure_logging(verbose: bool = False) -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV)
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    else:
        level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_FILENAME",
    "DEFAULT_CATEGORY",
    "DEFAULT_SCRIPTS",
    "DEFAULT_WATCH_INTERVAL",
    "IGNORED_DIRECTORIES",
    "configure_logging",
    "is_ignored_directory",
    "resolve_roots",
]
