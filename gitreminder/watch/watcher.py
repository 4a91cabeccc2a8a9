# gitreminder — Reminders for local commits that never left the machine.
#
# Copyright (c) 2026 Max Rheiner / Somniacs AG
#
# Licensed under the MIT License. You may obtain a copy
# of the license at:
#
#     https://opensource.org/licenses/MIT
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND.

"""Debounced watch over HEAD and refs/heads — one callback per quiet period."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from gitreminder.utils import config as cfg

log = logging.getLogger(__name__)

# Entry inside the metadata dir that points at the checked-out ref
_HEAD_NAME = "HEAD"

_CHANGE_EVENTS = {"created", "modified", "deleted", "moved"}


class DebouncedWatcher:
    """Watches a git metadata dir and calls ``callback(reason)`` after bursts settle.

    watchdog delivers events on its own thread; ``trigger`` hands them to the
    event loop captured in ``start()``. Each trigger cancels the pending
    debounce task and starts a new one, so only the last reason of a burst
    reaches the callback.
    """

    def __init__(self, git_dir: Path, callback: Callable[[str], Awaitable[None]],
                 debounce_delay: float | None = None):
        self.git_dir = Path(git_dir)
        self.callback = callback
        self.debounce_delay = cfg.DEBOUNCE_DELAY if debounce_delay is None else debounce_delay
        self._pending: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self.observer: Observer | None = None
        self.is_running = False

    async def start(self) -> None:
        if self.is_running:
            return
        self._loop = asyncio.get_running_loop()
        self.is_running = True

        self.observer = Observer()
        watched = 0
        if self.git_dir.is_dir():
            self.observer.schedule(_HeadHandler(self), str(self.git_dir), recursive=False)
            watched += 1
        heads = self.git_dir / "refs" / "heads"
        if heads.is_dir():
            self.observer.schedule(_RefsHandler(self), str(heads), recursive=True)
            watched += 1

        if watched:
            self.observer.start()
            log.info("Watching %s for HEAD and branch ref changes", self.git_dir)
        else:
            log.warning("No git metadata found at %s, nothing to watch", self.git_dir)

    async def stop(self) -> None:
        self.is_running = False
        if self.observer:
            try:
                if self.observer.is_alive():
                    self.observer.stop()
                    await asyncio.to_thread(self.observer.join)
            finally:
                self.observer = None
        if self._pending:
            self._pending.cancel()
            self._pending = None
        self._loop = None

    def trigger(self, reason: str) -> None:
        """Schedule a debounced callback. Safe to call from any thread."""
        if not self._loop:
            log.debug("Watcher not running; dropping '%s'", reason)
            return

        def _schedule() -> None:
            if not self.is_running:
                return
            if self._pending:
                self._pending.cancel()
            self._pending = asyncio.ensure_future(self._debounced(reason))

        self._loop.call_soon_threadsafe(_schedule)

    async def _debounced(self, reason: str) -> None:
        try:
            await asyncio.sleep(self.debounce_delay)
        except asyncio.CancelledError:
            return
        # Past the quiet window: a new trigger must not cancel the running scan
        self._pending = None
        await self.callback(reason)


def _event_names(event: FileSystemEvent) -> list[str]:
    paths = [event.src_path, getattr(event, "dest_path", "")]
    return [Path(p).name for p in paths if p]


class _HeadHandler(FileSystemEventHandler):
    """Metadata dir: only HEAD matters (git writes HEAD.lock, then renames)."""

    def __init__(self, parent: DebouncedWatcher):
        self.parent = parent

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _CHANGE_EVENTS or event.is_directory:
            return
        if _HEAD_NAME in _event_names(event):
            self.parent.trigger(f"HEAD {event.event_type}")


class _RefsHandler(FileSystemEventHandler):
    """refs/heads: any change to a branch ref."""

    def __init__(self, parent: DebouncedWatcher):
        self.parent = parent

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _CHANGE_EVENTS:
            return
        self.parent.trigger(f"refs/heads {event.event_type}: {Path(event.src_path).name}")
