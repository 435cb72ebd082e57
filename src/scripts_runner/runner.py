"""Script execution utilities."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from rich.console import Console

from .errors import ScriptExecutionError
from .models import ScriptRecord

logger = logging.getLogger(__name__)
console = Console()


def run_script(label: str, command: str, cwd: Optional[Path] = None) -> subprocess.Popen:
    """Start ``command`` in a shell and return without waiting for it.

    The child shares the caller's terminal so its output stays visible.
    """

    console.print(f"[bold blue]$ {command}[/bold blue] [dim]({label})[/dim]")
    logger.debug("Starting script %r in %s", label, cwd or Path.cwd())
    try:
        return subprocess.Popen(command, shell=True, cwd=str(cwd) if cwd else None)
    except OSError as exc:
        raise ScriptExecutionError(f"Cannot start script '{label}': {exc}") from exc


def run_record(script: ScriptRecord) -> subprocess.Popen:
    """Run a registry entry inside its project directory."""

    cwd = script.project_path if script.project_path and script.project_path.is_dir() else None
    return run_script(script.name, script.command, cwd=cwd)


__all__ = ["run_record", "run_script"]
