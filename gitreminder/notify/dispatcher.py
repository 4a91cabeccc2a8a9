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

"""Status messages, push prompts and the push action itself."""

from __future__ import annotations

import logging
import shlex
from typing import Callable

from gitreminder.git import runner
from gitreminder.git.branch import BranchInfo, BranchState
from gitreminder.notify.host import NotificationHost, StatusSlot
from gitreminder.scan.triggers import ScanTrigger
from gitreminder.utils import config as cfg

log = logging.getLogger(__name__)

PUSH_ACTION = "push it now"


def _prefixed(text: str) -> str:
    return f"{cfg.STATUS_PREFIX}: {text}"


def all_pushed_text() -> str:
    return _prefixed("👌 All pushed")


def unpushed_text(count: int, branch: str) -> str:
    plural = "s" if count > 1 else ""
    return _prefixed(f"🧐 {count} commit{plural} to push on <{branch}>")


def no_upstream_text(branch: str) -> str:
    return _prefixed(f"🫢 no upstream for <{branch}>")


def detached_text() -> str:
    return _prefixed("🤷‍♂️ Detached head")


def push_command(branch: str, set_upstream: bool) -> str:
    flag = "-u " if set_upstream else ""
    return f"git push {flag}{shlex.quote(cfg.REMOTE_NAME)} {shlex.quote(branch)}"


class NotificationDispatcher:
    """Turns scan results into status text and, where useful, a push prompt.

    Prompts are awaited by the caller's background task; accepting one pushes
    and asks for exactly one rescan through ``rescan``. The push result is
    never inspected: the rescan shows whether it worked.
    """

    def __init__(self, target: str, host: NotificationHost, slot: StatusSlot,
                 rescan: Callable[[ScanTrigger], object]):
        self.target = target
        self.host = host
        self.slot = slot
        self._rescan = rescan

    # -- Status --------------------------------------------------------------

    def handle_branch_state(self, info: BranchInfo) -> bool:
        """Show status for a non-tracked branch. Returns True if a prompt should follow."""
        if info.state is BranchState.NO_UPSTREAM:
            self.slot.replace(no_upstream_text(info.branch))
            return True
        if info.state is BranchState.DETACHED:
            self.slot.replace(detached_text())
        return False

    def report_unpushed(self, count: int, info: BranchInfo) -> bool:
        """Show the unpushed summary. Returns True if push advice should follow."""
        if count <= 0:
            self.slot.replace(all_pushed_text())
            return False
        self.slot.replace(unpushed_text(count, info.branch))
        return count >= cfg.PUSH_ADVICE_THRESHOLD

    # -- Prompts -------------------------------------------------------------

    async def notify_no_upstream(self, branch: str) -> None:
        selection = await self.host.show_information(
            _prefixed(f"On branch <{branch}>, no upstream found. "), PUSH_ACTION
        )
        if not selection:
            return
        await self.push_branch(branch, set_upstream=True)
        self._rescan(ScanTrigger.POST_PUSH_RESCAN)

    async def advise_pushing(self, count: int, info: BranchInfo) -> None:
        selection = await self.host.show_information(
            _prefixed(f"You have {count} commits to push on branch <{info.branch}>. "),
            PUSH_ACTION,
        )
        if not selection:
            return
        await self.push_branch(info.branch, set_upstream=False)
        self._rescan(ScanTrigger.POST_PUSH_RESCAN)

    # -- Push ----------------------------------------------------------------

    async def push_branch(self, branch: str, set_upstream: bool) -> None:
        self.slot.dispose()
        async with self.host.progress(f"Push branch <{branch}>") as progress:
            progress.report(message="Pushing...", increment=20)
            await runner.run_command(push_command(branch, set_upstream), self.target)
            progress.report(message="Pushed", increment=100)
        log.info("Pushed %s (set upstream: %s)", branch, set_upstream)
