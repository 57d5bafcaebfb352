"""A block toggled by shell commands."""

from __future__ import annotations

import asyncio
import os
import subprocess

from .errors import BarError

DEFAULT_FORMAT = " $icon "
DEFAULT_ICON_ON = "toggle_on"
DEFAULT_ICON_OFF = "toggle_off"


def default_shell():
    """The user's shell from ``$SHELL``, or ``sh``."""
    return os.environ.get("SHELL", "sh")


def toggle_icon(is_toggled, icon_on=None, icon_off=None):
    """Name of the icon for the given toggle state."""
    if is_toggled:
        return icon_on if icon_on is not None else DEFAULT_ICON_ON
    return icon_off if icon_off is not None else DEFAULT_ICON_OFF


async def read_state(shell, command):
    """Run ``command``; the toggle is on when it prints anything but whitespace."""
    try:
        process = await asyncio.create_subprocess_exec(
            shell,
            "-c",
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
        )
        stdout, _ = await process.communicate()
    except OSError as exc:
        raise BarError("Failed to run command_state", cause=exc) from exc
    try:
        text = stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BarError("The output of command_state is invalid UTF-8", cause=exc) from exc
    return bool(text.strip())


async def run_command(shell, command):
    """Run ``command`` and return whether it exited successfully."""
    try:
        process = await asyncio.create_subprocess_exec(
            shell,
            "-c",
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
        )
        await process.communicate()
    except OSError as exc:
        raise BarError("Failed to run command", cause=exc) from exc
    return process.returncode == 0