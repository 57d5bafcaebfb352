"""Mouse buttons and per-block click handlers."""

from __future__ import annotations

import asyncio
import subprocess
from dataclasses import dataclass
from enum import Enum

from .errors import BarError, ErrorKind


class MouseButton(Enum):
    """A mouse button as configured or reported by the bar."""

    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    WHEEL_UP = "up"
    WHEEL_DOWN = "down"
    FORWARD = "forward"
    BACK = "back"
    UNKNOWN = "unknown"
    DOUBLE_LEFT = "double_left"

    @classmethod
    def parse(cls, value):
        """Read a button from its configured name or its X11 button number."""
        if isinstance(value, bool):
            raise BarError("expected u64 or string", ErrorKind.CONFIG)
        if isinstance(value, str):
            return _BY_NAME.get(value, cls.UNKNOWN)
        if isinstance(value, int):
            return _BY_NUMBER.get(value, cls.UNKNOWN)
        raise BarError("expected u64 or string", ErrorKind.CONFIG)


_BY_NAME = {
    "left": MouseButton.LEFT,
    "middle": MouseButton.MIDDLE,
    "right": MouseButton.RIGHT,
    "up": MouseButton.WHEEL_UP,
    "down": MouseButton.WHEEL_DOWN,
    "forward": MouseButton.FORWARD,
    "back": MouseButton.BACK,
    "double_left": MouseButton.DOUBLE_LEFT,
}

_BY_NUMBER = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
    4: MouseButton.WHEEL_UP,
    5: MouseButton.WHEEL_DOWN,
    9: MouseButton.FORWARD,
    8: MouseButton.BACK,
}


@dataclass
class PostActions:
    """What a block should do after a click was handled."""

    action: str | None = None
    update: bool = False


_ENTRY_FIELDS = {"button", "widget", "cmd", "action", "sync", "update"}


@dataclass
class ClickConfigEntry:
    """One configured reaction to a button press."""

    button: MouseButton
    widget: str | None = None
    cmd: str | None = None
    action: str | None = None
    sync: bool = False
    update: bool = False

    @classmethod
    def from_dict(cls, data):
        """Build an entry from a configuration table, rejecting unknown keys."""
        unknown = set(data) - _ENTRY_FIELDS
        if unknown:
            raise BarError(
                f"unknown field(s) in click entry: {', '.join(sorted(unknown))}",
                ErrorKind.CONFIG,
            )
        if "button" not in data:
            raise BarError("missing field `button` in click entry", ErrorKind.CONFIG)
        return cls(
            button=MouseButton.parse(data["button"]),
            widget=data.get("widget"),
            cmd=data.get("cmd"),
            action=data.get("action"),
            sync=bool(data.get("sync", False)),
            update=bool(data.get("update", False)),
        )


class ClickHandler:
    """Dispatches button presses to configured commands and actions."""

    def __init__(self, entries=()):
        self.entries = list(entries)

    @classmethod
    def from_config(cls, items):
        """Build a handler from a list of configuration tables."""
        return cls(ClickConfigEntry.from_dict(item) for item in items or ())

    def find(self, button, widget=None):
        """Return the first entry matching the button and widget, or ``None``."""
        return next(
            (e for e in self.entries if e.button == button and e.widget == widget),
            None,
        )

    async def handle(self, button, widget=None):
        """Run the matching entry's command and return its post actions, if any."""
        entry = self.find(button, widget)
        if entry is None:
            return None
        if entry.cmd is not None:
            try:
                if entry.sync:
                    process = await asyncio.create_subprocess_exec(
                        "sh", "-c", entry.cmd,
                        stdin=subprocess.DEVNULL,
                        stdout=subprocess.DEVNULL,
                    )
                    await process.wait()
                else:
                    subprocess.Popen(
                        ["sh", "-c", entry.cmd],
                        stdin=subprocess.DEVNULL,
                        stdout=subprocess.DEVNULL,
                        start_new_session=True,
                    )
            except OSError as exc:
                raise BarError(
                    f"'{button.value}' button handler: Failed to run '{entry.cmd}",
                    cause=exc,
                ) from exc
        return PostActions(action=entry.action, update=entry.update)