"""Widget states."""

from __future__ import annotations

from enum import Enum

from .errors import BarError, ErrorKind


class State(Enum):
    """The visual state of a widget."""

    IDLE = "idle"
    INFO = "info"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, name):
        """Read a state from its configured name."""
        try:
            return cls(name)
        except ValueError:
            raise BarError(f"unknown state `{name}`", ErrorKind.CONFIG) from None