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

"""Single seam for running git commands — async shell exec, trimmed output."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


class CommandError(Exception):
    """A command exited non-zero or could not be spawned."""

    def __init__(self, command: str, returncode: int | None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or f"exit code {returncode}"
        super().__init__(detail)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command: trimmed stdout on success, the error otherwise."""
    ok: bool
    output: str = ""
    error: Exception | None = None

    @classmethod
    def success(cls, output: str) -> CommandResult:
        return cls(ok=True, output=output)

    @classmethod
    def failure(cls, error: Exception) -> CommandResult:
        return cls(ok=False, error=error)

    @property
    def message(self) -> str:
        """Human-readable error text ('' when ok)."""
        return str(self.error) if self.error is not None else ""


async def run_command(command: str, cwd: str) -> CommandResult:
    """Run *command* through the shell in *cwd*.

    Failures are logged with the offending command and returned, never raised.
    No retries happen here; callers decide what a failure means.
    """
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
    except OSError as e:
        log.info("error: %s\ncommand: %s", e, command)
        return CommandResult.failure(CommandError(command, None, str(e)))

    if proc.returncode != 0:
        err = stderr.decode(errors="replace").strip()
        log.info("error: %s\ncommand: %s", err or proc.returncode, command)
        return CommandResult.failure(CommandError(command, proc.returncode, err))

    return CommandResult.success(stdout.decode(errors="replace").strip())
