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

"""Remote-side queries — repo check, remote update with soft timeout, git dir."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from pathlib import Path

from gitreminder.git import runner
from gitreminder.git.runner import CommandResult
from gitreminder.utils import config as cfg

log = logging.getLogger(__name__)

# Update tasks that lost the race against the deadline. They keep running
# until git exits; holding a reference keeps them from being collected early.
_detached: set[asyncio.Task] = set()


class SyncTimeoutError(Exception):
    """Remote update did not settle before the deadline."""

    def __init__(self, message: str = "timeout"):
        super().__init__(message)


class RemoteSyncOutcome(enum.Enum):
    UPDATED = "updated"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class RemoteState(enum.Enum):
    OK = "ok"
    NO_REPO = "no_repo"
    FETCH_ERROR = "fetch_error"


@dataclass(frozen=True)
class RemoteInfo:
    state: RemoteState
    extra: str = ""


def sync_outcome(result: CommandResult) -> RemoteSyncOutcome:
    """Classify a sync result so timeouts and real failures read differently."""
    if result.ok:
        return RemoteSyncOutcome.UPDATED
    if isinstance(result.error, SyncTimeoutError):
        return RemoteSyncOutcome.TIMED_OUT
    return RemoteSyncOutcome.FAILED


def describe_sync(result: CommandResult) -> str:
    """Progress text for a finished sync."""
    outcome = sync_outcome(result)
    if outcome is RemoteSyncOutcome.UPDATED:
        return "Updated"
    if outcome is RemoteSyncOutcome.TIMED_OUT:
        return "Sync timed out"
    return f"Sync failed: {result.message}"


async def check_git_repo(target: str) -> bool:
    res = await runner.run_command("git status", target)
    return res.ok


async def get_git_remote(target: str) -> str | None:
    res = await runner.run_command("git remote -v", target)
    return res.output if res.ok else None


async def sync_remote(target: str, timeout: float | None = None) -> CommandResult:
    """Prune-and-update the configured remote, raced against a soft deadline.

    Whichever settles first wins. On timeout the update task is left running
    detached (not cancelled, not joined) and its eventual result is discarded.
    """
    if timeout is None:
        timeout = cfg.SYNC_TIMEOUT
    task = asyncio.ensure_future(
        runner.run_command(f"git remote update {cfg.REMOTE_NAME} --prune", target)
    )
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if task in done:
        return task.result()

    log.info("Remote update for %s exceeded %.1fs, leaving it detached", target, timeout)
    _detached.add(task)
    task.add_done_callback(_detached.discard)
    return CommandResult.failure(SyncTimeoutError())


async def get_remote_info(target: str) -> RemoteInfo:
    """Standalone remote check run once at activation."""
    if not await check_git_repo(target):
        return RemoteInfo(RemoteState.NO_REPO)
    if not await get_git_remote(target):
        return RemoteInfo(RemoteState.NO_REPO)
    res = await sync_remote(target)
    if not res.ok:
        return RemoteInfo(RemoteState.FETCH_ERROR, res.message)
    return RemoteInfo(RemoteState.OK)


async def find_repo_root(target: str) -> str:
    """Working tree top level for *target*, or *target* itself if git can't tell."""
    res = await runner.run_command("git rev-parse --show-toplevel", target)
    if not res.ok or not res.output:
        return target
    return res.output


def resolve_git_dir(root: str | Path) -> Path:
    """Metadata directory under *root*, following a linked worktree's gitdir file."""
    git_path = Path(root) / ".git"
    if git_path.is_file():
        try:
            content = git_path.read_text(encoding="utf-8", errors="ignore").strip()
        except OSError:
            return git_path
        if content.startswith("gitdir:"):
            raw = Path(content.split(":", 1)[1].strip())
            return raw if raw.is_absolute() else (Path(root) / raw).resolve()
    return git_path


async def find_git_dir(target: str) -> Path:
    return resolve_git_dir(await find_repo_root(target))
