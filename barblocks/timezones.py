"""Cycling through the timezones configured for the time block."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import BarError, ErrorKind

DEFAULT_FORMAT = " $icon $timestamp.datetime() "
DEFAULT_INTERVAL = 10


def _zone(name):
    if not isinstance(name, str):
        raise BarError(f"invalid timezone `{name!r}`", ErrorKind.CONFIG)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise BarError(f"unknown timezone `{name}`", ErrorKind.CONFIG, exc) from exc


def normalize_timezones(value):
    """Turn the ``timezone`` option (absent, one name or a list) into a list of zones."""
    if value is None:
        return []
    if isinstance(value, str):
        return [_zone(value)]
    if isinstance(value, (list, tuple)):
        return [_zone(name) for name in value]
    raise BarError("`timezone` must be a string or a list of strings", ErrorKind.CONFIG)


class TimezoneCycle:
    """Endless rotation through timezones; ``None`` stands for the local zone."""

    def __init__(self, timezones=()):
        self.timezones = tuple(timezones)
        self._index = 0

    @property
    def current(self):
        """The timezone in use, or ``None`` when none is configured."""
        if not self.timezones:
            return None
        return self.timezones[self._index]

    def next(self):
        """Move to the next timezone, wrapping around, and return it."""
        if self.timezones:
            self._index = (self._index + 1) % len(self.timezones)
        return self.current

    def prev(self):
        """Move to the previous timezone, wrapping around, and return it."""
        if self.timezones:
            self._index = (self._index - 1) % len(self.timezones)
        return self.current