"""Watson time-tracking status."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

from .errors import BarError
from .state import State

DEFAULT_FORMAT = " $text |"
DEFAULT_INTERVAL = 60

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_WEEK = 604_800
_DAY = 86_400
_HOUR = 3_600
_MINUTE = 60


def _local_now():
    return datetime.now().astimezone()


def _trunc_div(value, divisor):
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def _whole_seconds(delta):
    micros = delta // timedelta(microseconds=1)
    return _trunc_div(micros, 1_000_000)


def _spans(delta, with_seconds):
    seconds = _whole_seconds(delta)
    spans = [
        ("week", _trunc_div(seconds, _WEEK)),
        ("day", _trunc_div(seconds, _DAY)),
        ("hour", _trunc_div(seconds, _HOUR)),
        ("minute", _trunc_div(seconds, _MINUTE)),
    ]
    if with_seconds:
        spans.append(("second", seconds))
    return spans


def format_delta_past(delta):
    """Describe how long ago something started, e.g. ``"3 hours ago"``."""
    return next(
        (
            f"{count} {label}{'s' if count > 1 else ''} ago"
            for label, count in _spans(delta, with_seconds=False)
            if count != 0
        ),
        "now",
    )


def format_delta_after(delta):
    """Describe how long something lasted, e.g. ``"after 5 minutes"``."""
    return next(
        (
            f"after {count} {label}{'s' if count > 1 else ''}"
            for label, count in _spans(delta, with_seconds=True)
            if count != 0
        ),
        "now",
    )


@dataclass(frozen=True)
class WatsonActivity:
    """An active Watson frame: project, start time and tags."""

    project: str
    start: datetime
    tags: tuple = field(default_factory=tuple)

    def describe(self, show_time, verb, formatter, now=None):
        """Text such as ``"project [tag1 tag2] started 5 minutes ago"``."""
        text = self.project
        if self.tags:
            text += f" [{' '.join(self.tags)}]"
        if show_time:
            now = now if now is not None else _local_now()
            text += f" {verb} {formatter(now - self.start)}"
        return text


def _is_i64(value):
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and _I64_MIN <= value <= _I64_MAX
    )


def parse_state(text):
    """Read the Watson state file; ``None`` means no activity is running."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(data, dict):
        return None
    project = data.get("project")
    start = data.get("start")
    tags = data.get("tags")
    if not isinstance(project, str) or not _is_i64(start):
        return None
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        return None
    try:
        started = datetime.fromtimestamp(start, tz=timezone.utc).astimezone()
    except (OverflowError, OSError, ValueError):
        return None
    return WatsonActivity(project, started, tuple(tags))


def default_state_path():
    """Path of the state file in the user's configuration directory."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        base = Path(xdg)
    else:
        home = os.environ.get("HOME")
        if not home:
            try:
                home = str(Path.home())
            except RuntimeError as exc:
                raise BarError("xdg config directory not found", cause=exc) from exc
        base = Path(home) / ".config"
    return base / "watson" / "state"


def activity_text(state, previous=None, show_time=False, now=None):
    """Widget state and text for the current and previous Watson states.

    Returns ``(State, text)``; the text is ``None`` when nothing is shown.
    A just-stopped activity is summarised with its full duration.
    """
    if state is not None:
        return State.GOOD, state.describe(show_time, "started", format_delta_past, now)
    if previous is not None:
        return State.IDLE, previous.describe(True, "stopped", format_delta_after, now)
    return State.IDLE, None