"""Locate scripts files across the workspace and build a registry snapshot."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from .config import CONFIG_FILENAME, is_ignored_directory
from .errors import FileAccessError
from .filesystem import FileSystem
from .models import ConfigSource, RegistrySnapshot, ScriptRecord, WorkspaceRoot
from .store import load_source

logger = logging.getLogger(__name__)


def _root_sources(roots: Iterable[WorkspaceRoot], fs: FileSystem) -> list[ConfigSource]:
    sources = []
    for root in roots:
        file_path = root.path / CONFIG_FILENAME
        if fs.exists(file_path):
            sources.append(
                ConfigSource(file_path=file_path, project_name=root.name, project_path=root.path)
            )
    return sources


def _subdirectory_sources(root: WorkspaceRoot, fs: FileSystem) -> list[ConfigSource]:
    try:
        entries = fs.list_directory(root.path)
    except OSError as exc:
        logger.warning("Cannot scan subdirectories of %s: %s", root.path, exc)
        return []

    sources = []
    for entry in entries:
        if not entry.is_dir or is_ignored_directory(entry.name):
            continue
        project_path = root.path / entry.name
        file_path = project_path / CONFIG_FILENAME
        if fs.exists(file_path):
            sources.append(
                ConfigSource(file_path=file_path, project_name=entry.name, project_path=project_path)
            )
    return sources


def find_sources(roots: Sequence[WorkspaceRoot], fs: FileSystem) -> list[ConfigSource]:
    """Decide which scripts files make up the workspace.

    A single root-level file wins outright, even when subdirectories have their
    own files. Several root-level files are all used. Only when no root has a
    file are the immediate subdirectories of every root searched.
    """

    root_hits = _root_sources(roots, fs)
    if root_hits:
        if len(root_hits) == 1:
            logger.debug("Single scripts file at %s", root_hits[0].file_path)
        else:
            logger.debug("Found %d root-level scripts files", len(root_hits))
        return root_hits

    sources: list[ConfigSource] = []
    for root in roots:
        sources.extend(_subdirectory_sources(root, fs))
    logger.debug("Found %d scripts file(s) in subdirectories", len(sources))
    return sources


def discover(roots: Sequence[WorkspaceRoot], fs: FileSystem) -> RegistrySnapshot:
    """Run a full discovery pass over ``roots``.

    A file that cannot be read or loaded is logged and skipped; it never stops
    the other files from loading.
    """

    scripts: list[ScriptRecord] = []
    sources: dict[str, Path] = {}
    for source in find_sources(roots, fs):
        try:
            loaded = load_source(fs, source)
        except FileAccessError as exc:
            logger.warning("Skipping %s: %s", source.file_path, exc.reason)
            continue
        except Exception:  # noqa: BLE001 - one bad file must not stop the pass
            logger.exception("Skipping %s: unexpected error while loading", source.file_path)
            continue
        scripts.extend(loaded)
        sources[source.project_name] = source.file_path

    primary = next(iter(sources.values()), None)
    return RegistrySnapshot(scripts=tuple(scripts), sources=sources, primary_file_path=primary)


__all__ = ["discover", "find_sources"]
