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

"""Choose the one directory to watch."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import click

Chooser = Callable[[Sequence[str]], "str | None"]


def normalize(path: str) -> str:
    """Absolute path of an existing directory.

    Raises:
        ValueError: If *path* is not a directory
    """
    p = Path(path).expanduser().resolve()
    if not p.is_dir():
        raise ValueError(f"Not a directory: {path}")
    return str(p)


def prompt_chooser(candidates: Sequence[str]) -> str | None:
    """Numbered terminal menu; 0 picks nothing."""
    click.echo("Select a workspace for GitReminder to watch")
    for i, path in enumerate(candidates, start=1):
        click.echo(f"  {i}) {Path(path).name}  {path}")
    idx = click.prompt("Workspace", type=click.IntRange(0, len(candidates)), default=1)
    return candidates[idx - 1] if idx else None


def pick_workspace(candidates: Sequence[str],
                   chooser: Chooser = prompt_chooser) -> str | None:
    """None for no candidates, the only one, or whatever *chooser* picks."""
    spaces = list(dict.fromkeys(normalize(c) for c in candidates))
    if not spaces:
        return None
    if len(spaces) == 1:
        return spaces[0]
    choice = chooser(spaces)
    return choice if choice in spaces else None
