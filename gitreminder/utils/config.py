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

"""Central configuration — remote name, timings, prompt threshold, paths."""

import os
from importlib.metadata import version as _pkg_version
from pathlib import Path

import yaml

try:
    VERSION = _pkg_version("gitreminder")
except Exception:
    VERSION = "0.0.0"

GITREMINDER_DIR = Path.home() / ".gitreminder"
LOG_DIR = GITREMINDER_DIR / "logs"
LOG_FILE = LOG_DIR / "gitreminder.log"
USER_CONFIG_FILE = Path(
    os.environ.get("GITREMINDER_CONFIG", str(GITREMINDER_DIR / "config.yaml"))
)

# ── Defaults (overridden by ~/.gitreminder/config.yaml if it exists) ────────

_DEFAULTS = {
    "remote_name": "origin",
    "sync_timeout": 6.0,  # seconds before a remote update is reported as timed out
    "debounce_delay": 0.3,  # quiet window for metadata change bursts
    "push_advice_threshold": 2,  # unpushed commits needed before prompting
    "guard_overlapping_scans": False,
    "status_prefix": "[GitReminder]",
}

_TYPES = {
    "remote_name": str,
    "sync_timeout": (int, float),
    "debounce_delay": (int, float),
    "push_advice_threshold": int,
    "guard_overlapping_scans": bool,
    "status_prefix": str,
}

# Values outside these ranges are ignored like a wrong type
_RANGES = {
    "sync_timeout": lambda v: v > 0,
    "debounce_delay": lambda v: v > 0,
    # 1 would turn the passive single-commit status into a prompt
    "push_advice_threshold": lambda v: v >= 2,
    "remote_name": lambda v: bool(v.strip()),
}

# ── Mutable runtime state ───────────────────────────────────────────────────

REMOTE_NAME: str = _DEFAULTS["remote_name"]
SYNC_TIMEOUT: float = _DEFAULTS["sync_timeout"]
DEBOUNCE_DELAY: float = _DEFAULTS["debounce_delay"]
PUSH_ADVICE_THRESHOLD: int = _DEFAULTS["push_advice_threshold"]
GUARD_OVERLAPPING_SCANS: bool = _DEFAULTS["guard_overlapping_scans"]
STATUS_PREFIX: str = _DEFAULTS["status_prefix"]


def _accepts(key: str, value) -> bool:
    expected = _TYPES[key]
    # bool is an int subclass; never let True stand in for a number
    if isinstance(value, bool) and expected is not bool:
        return False
    if not isinstance(value, expected):
        return False
    check = _RANGES.get(key)
    return check is None or check(value)


def _apply(data: dict) -> None:
    global REMOTE_NAME, SYNC_TIMEOUT, DEBOUNCE_DELAY, PUSH_ADVICE_THRESHOLD
    global GUARD_OVERLAPPING_SCANS, STATUS_PREFIX

    if "remote_name" in data and _accepts("remote_name", data["remote_name"]):
        REMOTE_NAME = data["remote_name"]
    if "sync_timeout" in data and _accepts("sync_timeout", data["sync_timeout"]):
        SYNC_TIMEOUT = float(data["sync_timeout"])
    if "debounce_delay" in data and _accepts("debounce_delay", data["debounce_delay"]):
        DEBOUNCE_DELAY = float(data["debounce_delay"])
    if "push_advice_threshold" in data and _accepts(
        "push_advice_threshold", data["push_advice_threshold"]
    ):
        PUSH_ADVICE_THRESHOLD = data["push_advice_threshold"]
    if "guard_overlapping_scans" in data and _accepts(
        "guard_overlapping_scans", data["guard_overlapping_scans"]
    ):
        GUARD_OVERLAPPING_SCANS = data["guard_overlapping_scans"]
    if "status_prefix" in data and _accepts("status_prefix", data["status_prefix"]):
        STATUS_PREFIX = data["status_prefix"]


def load_user_config():
    """Load ~/.gitreminder/config.yaml and merge over defaults."""
    if not USER_CONFIG_FILE.exists():
        return

    try:
        data = yaml.safe_load(USER_CONFIG_FILE.read_text()) or {}
    except (yaml.YAMLError, OSError):
        return

    if isinstance(data, dict):
        _apply(data)


def get_editable_settings() -> dict:
    """Return the current effective settings."""
    return {
        "remote_name": REMOTE_NAME,
        "sync_timeout": SYNC_TIMEOUT,
        "debounce_delay": DEBOUNCE_DELAY,
        "push_advice_threshold": PUSH_ADVICE_THRESHOLD,
        "guard_overlapping_scans": GUARD_OVERLAPPING_SCANS,
        "status_prefix": STATUS_PREFIX,
    }


def override(**values):
    """Apply in-memory overrides (CLI flags) without touching config.yaml.

    ``None`` values are skipped so unset flags keep the configured value.
    """
    _apply({k: v for k, v in values.items() if v is not None})


def save_user_config(data: dict):
    """Write settings to config.yaml and update in-memory values."""
    _apply(data)
    USER_CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_FILE.write_text(
        yaml.dump(get_editable_settings(), default_flow_style=False, sort_keys=False)
    )


def reset_to_defaults():
    """Reset all settings to built-in defaults and remove config.yaml."""
    _apply(dict(_DEFAULTS))
    if USER_CONFIG_FILE.exists():
        USER_CONFIG_FILE.unlink()


# ── Load user config on import ──────────────────────────────────────────────

load_user_config()


def ensure_dirs():
    LOG_DIR.mkdir(parents=True, exist_ok=True)
