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

"""Scan pipeline — sync, classify, count, report — for one watch target."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable

from gitreminder.git import branch as git_branch
from gitreminder.git import remote
from gitreminder.git.branch import BranchState
from gitreminder.git.runner import CommandResult
from gitreminder.notify.dispatcher import NotificationDispatcher
from gitreminder.notify.host import NotificationHost, StatusSlot
from gitreminder.scan.triggers import ScanState, ScanTrigger
from gitreminder.utils import config as cfg

log = logging.getLogger(__name__)


class ScanOrchestrator:
    """Runs the scan pipeline and owns the single live status message.

    Scans are not serialized: the watcher's debounce is what keeps them
    apart. Setting ``guard_overlapping_scans`` in config.yaml makes a trigger
    that arrives mid-scan a no-op instead. Prompts run as background tasks
    so they can outlive the scan that raised them.
    """

    def __init__(self, target: str, host: NotificationHost):
        self.target = target
        self.host = host
        self.slot = StatusSlot(host)
        self.dispatcher = NotificationDispatcher(target, host, self.slot, self.request_scan)
        self.state = ScanState.IDLE
        self._in_flight = 0
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    # -- Entry points --------------------------------------------------------

    async def run_scan(self, trigger: ScanTrigger, detail: str = "") -> None:
        """Run one scan. Failures are logged with the trigger, never raised."""
        if self._closed:
            return
        if self._in_flight:
            if cfg.GUARD_OVERLAPPING_SCANS:
                log.info("Scan in progress, ignoring trigger: %s", trigger.value)
                return
            log.info("Scan from %s overlaps %d running scan(s)",
                     trigger.value, self._in_flight)

        self._in_flight += 1
        try:
            await self._scan(trigger, detail)
        except Exception:
            log.exception("fail to scan, from %s", trigger.value)
        finally:
            self._in_flight -= 1
            self.state = ScanState.IDLE

    def request_scan(self, trigger: ScanTrigger, detail: str = "") -> None:
        """Schedule a scan as a tracked task, so close() can cancel it."""
        if self._closed:
            return
        self._spawn(self.run_scan(trigger, detail), f"scan ({trigger.value})")

    async def drain(self) -> None:
        """Wait until no scan or prompt task is left, including ones they spawn."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Stop accepting scans, cancel pending work, dispose the status."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.slot.close()

    # -- Pipeline ------------------------------------------------------------

    async def _scan(self, trigger: ScanTrigger, detail: str) -> None:
        log.info("scanning for un-pushed commits by: %s%s",
                 trigger.value, f" ({detail})" if detail else "")

        self._set_state(ScanState.SYNCING)
        await self._sync_with_progress()

        self._set_state(ScanState.CLASSIFYING)
        info = await git_branch.classify(self.target)
        if info.state is not BranchState.TRACKED:
            self._set_state(ScanState.REPORTING)
            if self.dispatcher.handle_branch_state(info):
                self._spawn(self.dispatcher.notify_no_upstream(info.branch),
                            "no-upstream prompt")
            return

        self._set_state(ScanState.COUNTING)
        count = await git_branch.count_unpushed(self.target)

        self._set_state(ScanState.REPORTING)
        if self.dispatcher.report_unpushed(count, info):
            self._spawn(self.dispatcher.advise_pushing(count, info), "push advice")

    async def _sync_with_progress(self) -> CommandResult:
        # Drop the old summary first so "All pushed" never lingers during a sync
        self.slot.dispose()
        async with self.host.progress("Sync remote") as progress:
            progress.report(message=f"Sync remote {cfg.REMOTE_NAME}...", increment=20)
            res = await remote.sync_remote(self.target)
            progress.report(message=remote.describe_sync(res), increment=100)
        return res

    # -- Helpers -------------------------------------------------------------

    def _set_state(self, state: ScanState) -> None:
        log.debug("scan state %s -> %s", self.state.value, state.value)
        self.state = state

    def _spawn(self, coro: Awaitable[None], label: str) -> None:
        task = asyncio.ensure_future(self._guarded(coro, label))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @staticmethod
    async def _guarded(coro: Awaitable[None], label: str) -> None:
        try:
            await coro
        except Exception:
            log.exception("%s failed", label)
