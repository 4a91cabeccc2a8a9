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

"""Host UI boundary — status text, prompts, progress — and a terminal host."""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol

import click

log = logging.getLogger(__name__)


class Disposable(Protocol):
    def dispose(self) -> None: ...


class ProgressReporter(Protocol):
    def report(self, message: str | None = None, increment: int | None = None) -> None: ...


class NotificationHost(Protocol):
    """What the scan pipeline needs from whatever renders it."""

    def set_status_message(self, text: str) -> Disposable: ...

    async def show_information(self, message: str, *actions: str) -> str | None: ...

    async def show_error(self, message: str) -> None: ...

    def progress(self, title: str): ...


class StatusSlot:
    """Owner of the one live status message.

    replace() disposes the previous handle before setting a new one, so a
    handle is never dropped without being disposed.
    """

    def __init__(self, host: NotificationHost):
        self._host = host
        self._handle: Disposable | None = None
        self._closed = False

    @property
    def active(self) -> bool:
        return self._handle is not None

    def replace(self, text: str) -> None:
        if self._closed:
            return
        self.dispose()
        self._handle = self._host.set_status_message(text)

    def dispose(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.dispose()

    def close(self) -> None:
        """Dispose without replacement; later replace() calls are ignored."""
        self._closed = True
        self.dispose()


# ---------------------------------------------------------------------------
# Terminal host
# ---------------------------------------------------------------------------

async def run_in_daemon_thread(func, *args, **kwargs):
    """Run a blocking call (a stdin prompt) on a daemon thread.

    Unlike asyncio.to_thread, the thread is not part of the default executor,
    so cancelling the awaiting task on Ctrl+C does not leave asyncio.run
    waiting for the prompt to be answered before the process can exit.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _settle(setter, value) -> None:
        if not future.done():
            setter(value)

    def _worker() -> None:
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            outcome = (future.set_exception, e)
        else:
            outcome = (future.set_result, result)
        try:
            loop.call_soon_threadsafe(_settle, *outcome)
        except RuntimeError:
            # Loop already closed; nobody is waiting any more
            pass

    threading.Thread(target=_worker, daemon=True).start()
    return await future


class _StatusLine:
    def __init__(self, text: str):
        self.text = text
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True


class _TerminalProgress:
    def __init__(self, title: str):
        self.title = title
        self.done = 0

    def report(self, message: str | None = None, increment: int | None = None) -> None:
        if increment:
            self.done = min(100, self.done + increment)
        click.echo(f"  {self.title}: {message or ''} ({self.done}%)")


class TerminalHost:
    """Renders status lines and prompts on the controlling terminal.

    With ``interactive=False`` every prompt is shown but declined, which
    keeps the tool usable from scripts and CI.
    """

    def __init__(self, interactive: bool = True):
        self.interactive = interactive
        self._last_status: str | None = None

    def set_status_message(self, text: str) -> Disposable:
        # Identical consecutive status lines add nothing on a scrolling terminal
        if text != self._last_status:
            click.secho(text, bold=True)
            self._last_status = text
        return _StatusLine(text)

    async def show_information(self, message: str, *actions: str) -> str | None:
        if not actions or not self.interactive:
            click.echo(message)
            return None
        if len(actions) == 1:
            accepted = await run_in_daemon_thread(
                click.confirm, f"{message}{actions[0]}?", default=False
            )
            return actions[0] if accepted else None
        choice = await run_in_daemon_thread(
            click.prompt,
            message,
            type=click.Choice([*actions, "skip"]),
            default="skip",
        )
        return None if choice == "skip" else choice

    async def show_error(self, message: str) -> None:
        click.secho(message, fg="red", err=True)

    @asynccontextmanager
    async def progress(self, title: str) -> AsyncIterator[_TerminalProgress]:
        log.debug("progress begin: %s", title)
        try:
            yield _TerminalProgress(title)
        finally:
            log.debug("progress end: %s", title)
