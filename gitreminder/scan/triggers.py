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

"""Why a scan ran, and where a running scan currently is."""

import enum


class ScanTrigger(enum.Enum):
    """Used for log lines only; the pipeline never branches on it."""
    INITIAL = "initial"
    METADATA_CHANGE = "head file change"
    POST_PUSH_RESCAN = "pushed branch"


class ScanState(enum.Enum):
    IDLE = "idle"
    SYNCING = "syncing"
    CLASSIFYING = "classifying"
    COUNTING = "counting"
    REPORTING = "reporting"
