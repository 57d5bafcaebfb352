"""A countdown timer adjusted by clicks."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

DEFAULT_FORMAT = " $icon {$minutes:$seconds |}"
DEFAULT_INCREMENT = 30


def _utc_now():
    return datetime.now(timezone.utc)


def split_remaining(remaining):
    """Split a duration into whole hours, minutes and seconds.

    Hours are not wrapped; minutes and seconds are within 0..59 (negative
    durations give the same parts negated).
    """
    total = remaining // timedelta(microseconds=1)
    sign = -1 if total < 0 else 1
    seconds = abs(total) // 1_000_000
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return sign * hours, sign * minutes, sign * secs


class TeaTimer:
    """Timer state: an end time that clicks move around."""

    def __init__(self, increment=DEFAULT_INCREMENT, now=None):
        self.increment = timedelta(
            seconds=DEFAULT_INCREMENT if increment is None else increment
        )
        self.end = now if now is not None else _utc_now()
        self._was_active = False

    def remaining(self, now=None):
        """Time left until the end."""
        return self.end - (now if now is not None else _utc_now())

    def is_active(self, now=None):
        """Whether time is still left."""
        return self.remaining(now) > timedelta(0)

    def apply(self, action, now=None):
        """Handle one of the ``increment``, ``decrement`` or ``reset`` actions."""
        now = now if now is not None else _utc_now()
        active = self.is_active(now)
        if action == "increment":
            self.end = self.end + self.increment if active else now + self.increment
        elif action == "decrement" and active:
            self.end -= self.increment
        elif action == "reset":
            self.end = now

    def poll(self, now=None):
        """Record the current state; return ``True`` when the timer has just run out."""
        active = self.is_active(now)
        finished = self._was_active and not active
        self._was_active = active
        return finished

    def values(self, now=None):
        """Placeholder texts; empty while the timer is inactive."""
        remaining = self.remaining(now)
        if remaining <= timedelta(0):
            return {}
        hours, minutes, seconds = split_remaining(remaining)
        return {
            "hours": f"{hours:02}",
            "minutes": f"{minutes:02}",
            "seconds": f"{seconds:02}",
        }