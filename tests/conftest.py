"""Shared fakes: a scripted git and a host that records what it was asked to show."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

import pytest

from gitreminder.git import runner
from gitreminder.git.runner import CommandError, CommandResult
from gitreminder.utils import config as cfg

PROBE = "git log @{u}..HEAD"
ONELINE = "git log @{u}..HEAD --oneline"
BRANCH = "git branch --show-current"
UPDATE = "git remote update origin --prune"


class FakeGit:
    """Maps exact command strings to results. Unknown commands succeed with ''."""

    def __init__(self):
        self.responses: dict[str, object] = {}
        self.calls: list[str] = []

    def ok(self, command: str, output: str = ""):
        self.responses[command] = CommandResult.success(output)

    def fail(self, command: str, stderr: str = "fatal"):
        self.responses[command] = CommandResult.failure(CommandError(command, 128, stderr))

    def on(self, command: str, handler):
        """*handler* is an async callable returning a CommandResult."""
        self.responses[command] = handler

    def tracked(self, branch: str, unpushed: int):
        self.ok(PROBE)
        self.ok(BRANCH, branch)
        self.ok(ONELINE, "\n".join(f"abc{i} commit {i}" for i in range(unpushed)))

    def count(self, command: str) -> int:
        return self.calls.count(command)

    async def __call__(self, command: str, cwd: str) -> CommandResult:
        self.calls.append(command)
        response = self.responses.get(command)
        if response is None:
            return CommandResult.success("")
        if callable(response):
            return await response()
        return response


class FakeStatus:
    def __init__(self, text: str):
        self.text = text
        self.dispose_count = 0

    @property
    def disposed(self) -> bool:
        return self.dispose_count > 0

    def dispose(self):
        self.dispose_count += 1


class FakeProgress:
    def __init__(self, title: str, log: list):
        self.title = title
        self.log = log

    def report(self, message=None, increment=None):
        self.log.append((self.title, message, increment))


class FakeHost:
    def __init__(self, answer: str | None = None):
        self.answer = answer
        self.statuses: list[FakeStatus] = []
        self.prompts: list[tuple[str, tuple[str, ...]]] = []
        self.infos: list[str] = []
        self.errors: list[str] = []
        self.progress_log: list[tuple] = []

    @property
    def live(self) -> list[FakeStatus]:
        return [s for s in self.statuses if not s.disposed]

    def set_status_message(self, text: str) -> FakeStatus:
        status = FakeStatus(text)
        self.statuses.append(status)
        return status

    async def show_information(self, message: str, *actions: str):
        if not actions:
            self.infos.append(message)
            return None
        self.prompts.append((message, actions))
        await asyncio.sleep(0)
        return self.answer

    async def show_error(self, message: str):
        self.errors.append(message)

    @asynccontextmanager
    async def progress(self, title: str):
        self.progress_log.append((title, "begin", None))
        yield FakeProgress(title, self.progress_log)
        self.progress_log.append((title, "end", None))

    def progress_messages(self, title: str) -> list[str]:
        return [m for t, m, inc in self.progress_log if t == title and inc is not None]


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Isolate tests from whatever ~/.gitreminder/config.yaml holds."""
    monkeypatch.setattr(cfg, "REMOTE_NAME", "origin")
    monkeypatch.setattr(cfg, "SYNC_TIMEOUT", 6.0)
    monkeypatch.setattr(cfg, "DEBOUNCE_DELAY", 0.3)
    monkeypatch.setattr(cfg, "PUSH_ADVICE_THRESHOLD", 2)
    monkeypatch.setattr(cfg, "GUARD_OVERLAPPING_SCANS", False)
    monkeypatch.setattr(cfg, "STATUS_PREFIX", "[GitReminder]")


@pytest.fixture
def git(monkeypatch) -> FakeGit:
    fake = FakeGit()
    monkeypatch.setattr(runner, "run_command", fake)
    return fake


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
