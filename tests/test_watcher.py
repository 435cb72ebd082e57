from __future__ import annotations

import json
import threading
import time
from pathlib import Path

from scripts_runner.registry import ScriptRegistry
from scripts_runner.watcher import WatchService, config_file_signature


def test_signature_tracks_nested_files_and_skips_ignored(
    tmp_path: Path, write_scripts, root_for
) -> None:
    root = root_for(tmp_path / "ws")
    top = write_scripts(root.path, [])
    nested = write_scripts(root.path / "a" / "b", [])
    write_scripts(root.path / "node_modules" / "dep", [])
    write_scripts(root.path / ".git", [])

    paths = {entry[0] for entry in config_file_signature([root])}

    assert paths == {str(top), str(nested)}


def test_check_for_changes_reloads_once_per_change(
    tmp_path: Path, write_scripts, root_for
) -> None:
    root = root_for(tmp_path / "ws")
    path = write_scripts(root.path, [{"name": "a", "command": "1"}])
    registry = ScriptRegistry([root])
    reloaded = []
    service = WatchService(registry, interval=0.1, on_reload=reloaded.append)
    service._signature = config_file_signature(registry.roots)

    assert service.check_for_changes() is False

    path.write_text(
        json.dumps({"scripts": [{"name": "a", "command": "1"}, {"name": "b", "command": "22"}]}),
        encoding="utf-8",
    )

    assert service.check_for_changes() is True
    assert reloaded == [registry]
    assert [s.name for s in registry.get_all()] == ["a", "b"]
    assert service.check_for_changes() is False


def test_deleting_file_empties_registry(tmp_path: Path, write_scripts, root_for) -> None:
    root = root_for(tmp_path / "ws")
    path = write_scripts(root.path, [{"name": "a", "command": "1"}])
    registry = ScriptRegistry([root])
    service = WatchService(registry)
    service._signature = config_file_signature(registry.roots)

    path.unlink()

    assert service.check_for_changes() is True
    assert registry.get_all() == ()
    assert registry.primary_file_path is None


def test_reload_requests_are_coalesced_while_busy(
    tmp_path: Path, write_scripts, root_for
) -> None:
    root = root_for(tmp_path / "ws")
    path = write_scripts(root.path, [{"name": "a", "command": "1"}])
    registry = ScriptRegistry([root])
    results = []

    registry._lock.acquire()
    try:
        worker = threading.Thread(target=lambda: results.append(registry.request_reload()))
        worker.start()
        deadline = time.monotonic() + 5
        while not registry._reload_queued and time.monotonic() < deadline:
            time.sleep(0.01)

        assert registry.request_reload() is False
        path.write_text(json.dumps([{"name": "late", "command": "2"}]), encoding="utf-8")
    finally:
        registry._lock.release()

    worker.join(timeout=5)

    assert results == [True]
    assert [s.name for s in registry.get_all()] == ["late"]
