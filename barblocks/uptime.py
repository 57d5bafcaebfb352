"""System uptime in its two largest units."""

from __future__ import annotations

import re

from .errors import BarError

DEFAULT_FORMAT = " $icon $text "
DEFAULT_INTERVAL = 60
PROC_UPTIME = "/proc/uptime"

_SECONDS = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1

_WEEK = 604_800
_DAY = 86_400
_HOUR = 3_600
_MINUTE = 60


def parse_proc_uptime(text):
    """Whole seconds of uptime from the contents of ``/proc/uptime``."""
    whole = text.split(".", 1)[0]
    if not _SECONDS.fullmatch(whole) or int(whole) > _U64_MAX:
        raise BarError("/proc/uptime has invalid content")
    return int(whole)


def format_uptime(seconds):
    """Describe an uptime by its two largest units, e.g. weeks and days."""
    weeks, seconds = divmod(seconds, _WEEK)
    days, seconds = divmod(seconds, _DAY)
    hours, seconds = divmod(seconds, _HOUR)
    minutes, seconds = divmod(seconds, _MINUTE)
    if weeks > 0:
        return f"{weeks}w {days}d"
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {seconds}s"


def read_uptime(path=PROC_UPTIME):
    """Read the uptime in whole seconds from ``path``."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise BarError("Failed to read /proc/uptime", cause=exc) from exc
    return parse_proc_uptime(text)