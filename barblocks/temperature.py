"""System temperature: scales, thresholds and summaries of sensor readings."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum

from .state import State

DEFAULT_GOOD = 20.0
DEFAULT_IDLE = 45.0
DEFAULT_INFO = 60.0
DEFAULT_WARN = 80.0

DEFAULT_FORMAT = " $icon $average avg, $max max "
DEFAULT_INTERVAL = 5

_MIN_READING = -100.0
_MAX_READING = 150.0


class TemperatureScale(Enum):
    """Unit in which temperatures are shown and configured."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    def from_celsius(self, value):
        """Convert a Celsius value to this scale."""
        if self is TemperatureScale.FAHRENHEIT:
            return value * 1.8 + 32.0
        return value


@dataclass(frozen=True)
class Thresholds:
    """Upper bounds of the good, idle, info and warning states."""

    good: float
    idle: float
    info: float
    warning: float

    @classmethod
    def from_config(
        cls, scale=TemperatureScale.CELSIUS, good=None, idle=None, info=None, warning=None
    ):
        """Use the configured bounds, defaulting to the built-in ones in ``scale``."""

        def pick(value, default):
            return value if value is not None else scale.from_celsius(default)

        return cls(
            good=pick(good, DEFAULT_GOOD),
            idle=pick(idle, DEFAULT_IDLE),
            info=pick(info, DEFAULT_INFO),
            warning=pick(warning, DEFAULT_WARN),
        )

    def state(self, max_temp):
        """Widget state for the hottest reading."""
        if max_temp <= self.good:
            return State.GOOD
        if max_temp <= self.idle:
            return State.IDLE
        if max_temp <= self.info:
            return State.INFO
        if max_temp <= self.warning:
            return State.WARNING
        return State.CRITICAL


def accept_reading(value):
    """Whether a Celsius reading is plausible; implausible ones are reported to stderr."""
    if _MIN_READING <= value <= _MAX_READING:
        return True
    print(f"Temperature ({value}) outside of range ([-100, 150])", file=sys.stderr)
    return False


def summarize(temps):
    """Return ``(minimum, average, maximum)`` of the readings.

    Minimum and maximum are 0.0 when there are no readings; the average is then NaN.
    """
    temps = list(temps)
    if not temps:
        return 0.0, math.nan, 0.0
    return min(temps), sum(temps) / len(temps), max(temps)