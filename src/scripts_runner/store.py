"""Reading and writing scripts files for discovered projects."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from .config import DEFAULT_SCRIPTS
from .errors import FileAccessError
from .filesystem import FileSystem
from .models import ConfigSource, ScriptRecord
from .parser import parse_scripts, serialize_scripts

logger = logging.getLogger(__name__)


def load_source(fs: FileSystem, source: ConfigSource) -> list[ScriptRecord]:
    """Read ``source`` and tag every script with its project.

    Raises:
        FileAccessError: When the file cannot be read or decoded.
    """

    try:
        content = fs.read_text(source.file_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(source.file_path, str(exc)) from exc

    scripts = parse_scripts(content)
    logger.debug("Loaded %d script(s) from %s", len(scripts), source.file_path)
    return [script.tagged(source.project_name, source.project_path) for script in scripts]


def _write(fs: FileSystem, path: Path, content: str) -> None:
    try:
        fs.write_text(path, content)
    except OSError as exc:
        raise FileAccessError(path, str(exc)) from exc


def save_scripts(fs: FileSystem, path: Path, scripts: Iterable[ScriptRecord]) -> None:
    _write(fs, path, serialize_scripts(scripts))
    logger.debug("Saved scripts to %s", path)


def write_default_file(fs: FileSystem, path: Path) -> None:
    """Write a scripts file holding the example script."""

    payload = {"scripts": DEFAULT_SCRIPTS}
    _write(fs, path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
    logger.info("Created %s", path)


__all__ = ["load_source", "save_scripts", "write_default_file"]
