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

"""Activation — remote check, initial scan, watcher lifecycle."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from gitreminder.git import remote
from gitreminder.git.remote import RemoteInfo, RemoteState
from gitreminder.notify.host import NotificationHost
from gitreminder.scan.orchestrator import ScanOrchestrator
from gitreminder.scan.triggers import ScanTrigger
from gitreminder.watch.watcher import DebouncedWatcher

log = logging.getLogger(__name__)


async def check_remote(target: str, host: NotificationHost) -> RemoteInfo:
    """Standalone remote check; tells the user when there is nothing to watch."""
    async with host.progress("Checking remote") as progress:
        progress.report(message="Checking remote...", increment=20)
        info = await remote.get_remote_info(target)
        progress.report(message=info.state.value, increment=100)

    if info.state is RemoteState.NO_REPO:
        await host.show_information("No remote repository found. ")
    elif info.state is RemoteState.FETCH_ERROR:
        await host.show_error(f"Fetch remote error: {info.extra}.")
    return info


class Reminder:
    """Scan orchestrator plus the watcher feeding it, for one target."""

    def __init__(self, target: str, host: NotificationHost,
                 debounce_delay: float | None = None):
        self.target = target
        self.orchestrator = ScanOrchestrator(target, host)
        self.debounce_delay = debounce_delay
        self.watcher: DebouncedWatcher | None = None

    async def start(self) -> None:
        # The initial scan bypasses the debounce entirely
        self.orchestrator.request_scan(ScanTrigger.INITIAL)
        git_dir = await remote.find_git_dir(self.target)
        self.watcher = DebouncedWatcher(git_dir, self._on_change, self.debounce_delay)
        await self.watcher.start()

    async def stop(self) -> None:
        if self.watcher:
            await self.watcher.stop()
            self.watcher = None
        await self.orchestrator.close()
        log.info("Stopped watching %s", self.target)

    async def _on_change(self, reason: str) -> None:
        # Runs as an orchestrator task so stop() cancels a scan still in flight
        self.orchestrator.request_scan(ScanTrigger.METADATA_CHANGE, reason)


@asynccontextmanager
async def watching(target: str, host: NotificationHost,
                   debounce_delay: float | None = None) -> AsyncIterator[Reminder]:
    reminder = Reminder(target, host, debounce_delay)
    await reminder.start()
    try:
        yield reminder
    finally:
        await reminder.stop()


async def watch(target: str, host: NotificationHost,
                stop: asyncio.Event | None = None) -> RemoteInfo:
    """Check the remote, then watch *target* until *stop* is set or we are cancelled."""
    info = await check_remote(target, host)
    if info.state is not RemoteState.OK:
        return info
    async with watching(target, host):
        await (stop or asyncio.Event()).wait()
    return info


async def check_once(target: str, host: NotificationHost) -> RemoteInfo:
    """One scan without a watcher; waits for any prompt it raises."""
    info = await check_remote(target, host)
    if info.state is not RemoteState.OK:
        return info
    orchestrator = ScanOrchestrator(target, host)
    try:
        await orchestrator.run_scan(ScanTrigger.INITIAL)
        await orchestrator.drain()
    finally:
        await orchestrator.close()
    return info
