"""Exceptions raised by Scripts Runner."""
from __future__ import annotations

from pathlib import Path


class ScriptsError(RuntimeError):
    """Base class for every error raised by this package."""


class ParseError(ScriptsError):
    """Raised internally when a configuration file cannot be understood.

    It never leaves the parser: malformed content counts as an empty script list.
    """


class DuplicateNameError(ScriptsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"A script named '{name}' already exists.")
        self.name = name


class NotFoundError(ScriptsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Script '{name}' was not found.")
        self.name = name


class NoWorkspaceError(ScriptsError):
    def __init__(self) -> None:
        super().__init__("No workspace folder is open.")


class FileAlreadyExistsError(ScriptsError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"The file {path} already exists.")
        self.path = path


class NoPrimaryFileError(ScriptsError):
    def __init__(self) -> None:
        super().__init__("There is no .scriptsrc file to write to.")


class FileAccessError(ScriptsError):
    """Raised when reading or writing a specific file fails."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot access {path}: {reason}")
        self.path = path
        self.reason = reason


class ScriptExecutionError(ScriptsError):
    """Raised when a script command cannot be started."""


__all__ = [
    "DuplicateNameError",
    "FileAccessError",
    "FileAlreadyExistsError",
    "NoPrimaryFileError",
    "NoWorkspaceError",
    "NotFoundError",
    "ParseError",
    "ScriptExecutionError",
    "ScriptsError",
]
