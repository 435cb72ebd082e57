"""The in-memory registry of discovered scripts."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, Optional

from .config import CONFIG_FILENAME
from .discovery import discover
from .errors import (
    DuplicateNameError,
    FileAlreadyExistsError,
    NoPrimaryFileError,
    NotFoundError,
    NoWorkspaceError,
)
from .filesystem import FileSystem, LocalFileSystem
from .models import RegistrySnapshot, ScriptRecord, WorkspaceRoot
from .store import save_scripts, write_default_file

logger = logging.getLogger(__name__)


class ScriptRegistry:
    """Owns the scripts of a workspace and every change made to them.

    The state is a :class:`RegistrySnapshot` that is replaced as a whole by each
    reload. Reloads and mutations hold the same lock, so they never overlap.

    Name uniqueness is checked across the whole registry, not per project, and
    every write goes to :attr:`primary_file_path`, even when the scripts were
    loaded from several projects.
    """

    def __init__(
        self,
        roots: Iterable[WorkspaceRoot],
        fs: Optional[FileSystem] = None,
        *,
        autoload: bool = True,
    ) -> None:
        self._roots = tuple(roots)
        self._fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self._snapshot = RegistrySnapshot()
        self._lock = threading.Lock()
        self._flag_lock = threading.Lock()
        self._reload_queued = False
        if autoload:
            self.reload()

    @property
    def roots(self) -> tuple[WorkspaceRoot, ...]:
        return self._roots

    @property
    def primary_file_path(self) -> Optional[Path]:
        return self._snapshot.primary_file_path

    @property
    def sources(self) -> dict[str, Path]:
        return dict(self._snapshot.sources)

    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    # ------------------------------------------------------------------
    # Loading
    def reload(self) -> None:
        """Run discovery and replace the current snapshot."""

        with self._lock:
            self._reload_locked()

    def request_reload(self) -> bool:
        """Reload on behalf of an external trigger such as a file change.

        At most one request waits behind a running operation; later requests
        arriving before it starts are folded into it. Returns ``False`` when the
        request was folded into one already queued.
        """

        with self._flag_lock:
            if self._reload_queued:
                return False
            self._reload_queued = True
        with self._lock:
            with self._flag_lock:
                self._reload_queued = False
            self._reload_locked()
        return True

    def _reload_locked(self) -> None:
        self._snapshot = discover(self._roots, self._fs)
        logger.debug(
            "Registry reloaded: %d script(s) from %d file(s)",
            len(self._snapshot.scripts),
            len(self._snapshot.sources),
        )

    # ------------------------------------------------------------------
    # Queries
    def get_all(self) -> tuple[ScriptRecord, ...]:
        return self._snapshot.scripts

    def get(self, name: str) -> ScriptRecord:
        for script in self._snapshot.scripts:
            if script.name == name:
                return script
        raise NotFoundError(name)

    # ------------------------------------------------------------------
    # Mutations
    def add(self, record: ScriptRecord) -> None:
        with self._lock:
            scripts = list(self._snapshot.scripts)
            if any(script.name == record.name for script in scripts):
                raise DuplicateNameError(record.name)
            scripts.append(record)
            self._persist_locked(scripts)

    def update(self, old_name: str, record: ScriptRecord) -> None:
        with self._lock:
            scripts = list(self._snapshot.scripts)
            index = _index_of(scripts, old_name)
            if index is None:
                raise NotFoundError(old_name)
            if record.name != old_name and _index_of(scripts, record.name) is not None:
                raise DuplicateNameError(record.name)
            scripts[index] = record
            self._persist_locked(scripts)

    def delete(self, name: str) -> None:
        with self._lock:
            scripts = list(self._snapshot.scripts)
            index = _index_of(scripts, name)
            if index is None:
                raise NotFoundError(name)
            del scripts[index]
            self._persist_locked(scripts)

    def create_default_file(self) -> Path:
        """Write an example scripts file into the first workspace root."""

        with self._lock:
            if not self._roots:
                raise NoWorkspaceError()
            file_path = self._roots[0].path / CONFIG_FILENAME
            if self._fs.exists(file_path):
                raise FileAlreadyExistsError(file_path)
            write_default_file(self._fs, file_path)
            self._reload_locked()
        return file_path

    def _persist_locked(self, scripts: list[ScriptRecord]) -> None:
        primary = self._snapshot.primary_file_path
        if primary is None:
            raise NoPrimaryFileError()
        save_scripts(self._fs, primary, scripts)
        self._reload_locked()


def _index_of(scripts: list[ScriptRecord], name: str) -> Optional[int]:
    for index, script in enumerate(scripts):
        if script.name == name:
            return index
    return None


__all__ = ["ScriptRegistry"]
