"""Polling change detection for scripts files."""
from __future__ import annotations

import logging
import os
import signal
import threading
from typing import Callable, Iterable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from rich.console import Console

from .config import CONFIG_FILENAME, DEFAULT_WATCH_INTERVAL, is_ignored_directory
from .models import WorkspaceRoot
from .registry import ScriptRegistry

logger = logging.getLogger(__name__)
console = Console()

Signature = frozenset[tuple[str, int, int]]


def config_file_signature(roots: Iterable[WorkspaceRoot]) -> Signature:
    """Fingerprint every scripts file below ``roots``.

    Any file being created, modified or removed changes the result.
    """

    entries = set()
    for root in roots:
        for dirpath, dirnames, filenames in os.walk(root.path):
            dirnames[:] = [name for name in dirnames if not is_ignored_directory(name)]
            if CONFIG_FILENAME not in filenames:
                continue
            file_path = os.path.join(dirpath, CONFIG_FILENAME)
            try:
                stat = os.stat(file_path)
            except OSError:
                # Removed between listing and stat.
                continue
            entries.add((file_path, stat.st_mtime_ns, stat.st_size))
    return frozenset(entries)


class WatchService:
    """Reloads the registry whenever a scripts file changes on disk."""

    JOB_ID = "scripts-watch"

    def __init__(
        self,
        registry: ScriptRegistry,
        interval: float = DEFAULT_WATCH_INTERVAL,
        on_reload: Optional[Callable[[ScriptRegistry], None]] = None,
    ) -> None:
        self.registry = registry
        self.interval = interval
        self.on_reload = on_reload
        self.scheduler = BackgroundScheduler()
        self._stop_event = threading.Event()
        self._signature: Optional[Signature] = None

    def start(self) -> None:
        console.print("[bold green]Watching for .scriptsrc changes...[/bold green]")
        self._signature = config_file_signature(self.registry.roots)
        self.scheduler.add_job(
            self.check_for_changes,
            trigger=IntervalTrigger(seconds=self.interval),
            id=self.JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        self._install_signal_handlers()
        try:
            while not self._stop_event.is_set():
                self._stop_event.wait(1)
        finally:
            self.scheduler.shutdown(wait=True)
            console.print("[bold yellow]Watcher stopped.[/bold yellow]")

    def stop(self) -> None:
        self._stop_event.set()

    def check_for_changes(self) -> bool:
        """Reload when the scripts files differ from the last check."""

        signature = config_file_signature(self.registry.roots)
        if signature == self._signature:
            return False
        self._signature = signature
        logger.debug("Scripts files changed, reloading")
        if not self.registry.request_reload():
            return False
        if self.on_reload is not None:
            self.on_reload(self.registry)
        return True

    def _install_signal_handlers(self) -> None:
        try:
            signal.signal(signal.SIGINT, self._handle_signal)
            signal.signal(signal.SIGTERM, self._handle_signal)
        except ValueError:
            # Only the main thread may install handlers.
            logger.debug("Signal handlers not installed")

    def _handle_signal(self, signum, frame) -> None:  # type: ignore[override]
        console.print(f"[yellow]Received signal {signum}, shutting down...[/yellow]")
        self.stop()


def watch(
    registry: ScriptRegistry,
    interval: float = DEFAULT_WATCH_INTERVAL,
    on_reload: Optional[Callable[[ScriptRegistry], None]] = None,
) -> None:
    service = WatchService(registry, interval=interval, on_reload=on_reload)
    service.start()


__all__ = ["WatchService", "config_file_signature", "watch"]
