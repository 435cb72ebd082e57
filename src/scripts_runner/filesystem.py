"""File access used by discovery and persistence."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class DirEntry:
    name: str
    is_dir: bool


class FileSystem(Protocol):
    """The file operations the engine needs; swapped out in tests."""

    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def list_directory(self, path: Path) -> list[DirEntry]: ...


class LocalFileSystem:
    """:class:`FileSystem` backed by :mod:`pathlib`."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        # Undecodable bytes become U+FFFD so the rest of the file still loads.
        return path.read_text(encoding="utf-8", errors="replace")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def list_directory(self, path: Path) -> list[DirEntry]:
        # Sorted so that the tree looks the same on every platform.
        entries = [DirEntry(name=child.name, is_dir=child.is_dir()) for child in path.iterdir()]
        return sorted(entries, key=lambda entry: entry.name)


__all__ = ["DirEntry", "FileSystem", "LocalFileSystem"]
