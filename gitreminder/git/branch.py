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

"""Branch classification and unpushed-commit counting."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from gitreminder.git import runner

# Commits reachable from HEAD but not from the upstream ref
_UPSTREAM_RANGE = "@{u}..HEAD"


class BranchState(enum.Enum):
    TRACKED = "tracked"
    NO_UPSTREAM = "no_upstream"
    DETACHED = "detached"


@dataclass(frozen=True)
class BranchInfo:
    state: BranchState
    branch: str = ""  # empty only when DETACHED


async def has_upstream(target: str) -> bool:
    """Probe whether HEAD has a resolvable upstream. Output is ignored."""
    res = await runner.run_command(f"git log {_UPSTREAM_RANGE}", target)
    return res.ok


async def current_branch(target: str) -> str:
    res = await runner.run_command("git branch --show-current", target)
    return res.output if res.ok else ""


async def classify(target: str) -> BranchInfo:
    """Work out tracking state for the checked-out branch.

    The upstream probe runs first, but a missing branch name always wins:
    no name means DETACHED whatever the probe said.
    """
    upstream = await has_upstream(target)
    branch = await current_branch(target)
    if not branch:
        return BranchInfo(BranchState.DETACHED, "")
    if not upstream:
        return BranchInfo(BranchState.NO_UPSTREAM, branch)
    return BranchInfo(BranchState.TRACKED, branch)


async def count_unpushed(target: str) -> int:
    """Number of local commits not on the upstream; 0 if git fails.

    Only reached after classify() saw an upstream, so a failure here is
    treated as "nothing to report" rather than surfaced.
    """
    res = await runner.run_command(f"git log {_UPSTREAM_RANGE} --oneline", target)
    if not res.ok:
        return 0
    return sum(1 for line in res.output.splitlines() if line.strip())
