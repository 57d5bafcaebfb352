"""X11 screen information from the ``xrandr`` command."""

from __future__ import annotations

import asyncio
import math
import re
import subprocess
from dataclasses import dataclass

from .errors import BarError

DEFAULT_FORMAT = " $icon $display $brightness_icon $brightness "
DEFAULT_INTERVAL = 5
DEFAULT_STEP_WIDTH = 5

_U32_MAX = 2**32 - 1
_PARSE_ERROR = "Failed to parse xrandr output"


def _float_text(value):
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


def _saturating_u32(value):
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


@dataclass
class Monitor:
    """An active output: its name, brightness in percent and resolution."""

    name: str
    brightness: int
    resolution: str

    def set_brightness(self, brightness):
        """Ask xrandr to change the gamma brightness; failures are ignored."""
        command = (
            f"xrandr --output {self.name} --brightness  {_float_text(brightness / 100.0)}"
        )
        try:
            subprocess.Popen(
                ["sh", "-c", command],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError:
            pass
        self.brightness = brightness

    def brightness_up(self, step=DEFAULT_STEP_WIDTH):
        """Raise the brightness by ``step`` percent, at most to 100."""
        self.set_brightness(min(self.brightness + step, 100))

    def brightness_down(self, step=DEFAULT_STEP_WIDTH):
        """Lower the brightness by ``step`` percent, not below 0."""
        self.set_brightness(max(self.brightness - step, 0))


def _line_filter(active_output):
    patterns = [
        f"{line.split()[-1]} connected"
        for line in active_output.splitlines()
        if line.split()
    ]
    patterns.append("Brightness:")
    try:
        return [re.compile(pattern) for pattern in patterns]
    except re.error as exc:
        raise BarError("Failed to create RegexSet", cause=exc) from exc


def _parse_pair(line1, line2):
    tokens = line1.split()
    if not tokens:
        raise BarError(_PARSE_ERROR)
    if len(tokens) < 3:
        raise BarError(_PARSE_ERROR)
    resolution = tokens[2].split("+", 1)[0]
    parts = line2.split(":")
    if len(parts) < 2:
        raise BarError(_PARSE_ERROR)
    try:
        value = float(parts[1].strip())
    except ValueError as exc:
        raise BarError(_PARSE_ERROR, cause=exc) from exc
    return Monitor(tokens[0], _saturating_u32(value * 100.0), resolution)


def parse_monitors(active_output, verbose_output):
    """Combine ``--listactivemonitors`` and ``--verbose`` output into monitors."""
    regexes = _line_filter(active_output)
    lines = iter(
        line
        for line in verbose_output.splitlines()
        if any(regex.search(line) for regex in regexes)
    )
    monitors = []
    for line1 in lines:
        line2 = next(lines, None)
        if line2 is None:
            break
        monitors.append(_parse_pair(line1, line2))
    return monitors


async def _xrandr(arg, message):
    try:
        process = await asyncio.create_subprocess_exec(
            "xrandr",
            arg,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
        )
        stdout, _ = await process.communicate()
    except OSError as exc:
        raise BarError(message, cause=exc) from exc
    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BarError("xrandr produced non-UTF8 output", cause=exc) from exc


async def get_monitors():
    """Query xrandr for the active monitors."""
    active = await _xrandr("--listactivemonitors", "Failed to collect active xrandr monitors")
    verbose = await _xrandr("--verbose", "Failed to collect xrandr monitors info")
    return parse_monitors(active, verbose)