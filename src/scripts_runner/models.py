"""Dataclasses describing scripts, their sources and the registry snapshot."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from .config import DEFAULT_CATEGORY


@dataclass(frozen=True, slots=True)
class ScriptRecord:
    """A named shell command declared in a configuration file."""

    name: str
    command: str
    description: Optional[str] = None
    category: Optional[str] = None
    project_path: Optional[Path] = None
    project_name: Optional[str] = None

    @property
    def effective_category(self) -> str:
        return self.category or DEFAULT_CATEGORY

    def tagged(self, project_name: str, project_path: Path) -> "ScriptRecord":
        """Return a copy of the record attached to a project."""

        return replace(self, project_name=project_name, project_path=project_path)


@dataclass(frozen=True, slots=True)
class WorkspaceRoot:
    """A top-level folder of the workspace."""

    path: Path
    name: str


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One discovered configuration file and the project it belongs to."""

    file_path: Path
    project_name: str
    project_path: Path


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """The result of a discovery pass.

    ``sources`` maps project names to file paths in the order they were
    discovered; ``primary_file_path`` is the first of them.
    """

    scripts: tuple[ScriptRecord, ...] = ()
    sources: dict[str, Path] = field(default_factory=dict)
    primary_file_path: Optional[Path] = None


__all__ = ["ConfigSource", "RegistrySnapshot", "ScriptRecord", "WorkspaceRoot"]
