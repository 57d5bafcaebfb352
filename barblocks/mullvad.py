"""VPN driver using the ``mullvad`` command."""

from __future__ import annotations

import asyncio
import re
import subprocess

from .errors import BarError
from .vpn import DISCONNECTED, ERROR, Connection, VpnStatus

_CONNECTED = re.compile(r"Connected to ([a-z]{2}).*, ([A-Z][a-z]*).*\n")


def parse_mullvad_status(text):
    """Read the connection status from ``mullvad status`` output."""
    if "Disconnected" in text:
        return DISCONNECTED
    if "Connected" in text:
        match = _CONNECTED.search(text)
        if match is None:
            return VpnStatus.connected()
        return VpnStatus.connected(match.group(2), match.group(1))
    return ERROR


class MullvadDriver:
    """Queries and toggles Mullvad VPN."""

    async def get_status(self):
        """Current connection status."""
        try:
            process = await asyncio.create_subprocess_exec(
                "mullvad",
                "status",
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
            )
            stdout, _ = await process.communicate()
        except OSError as exc:
            raise BarError("Problem running mullvad command", cause=exc) from exc
        try:
            text = stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BarError("mullvad produced non-UTF8 output", cause=exc) from exc
        return parse_mullvad_status(text)

    async def _run(self, arg):
        try:
            process = await asyncio.create_subprocess_exec(
                "mullvad",
                arg,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
            )
            code = await process.wait()
        except OSError as exc:
            raise BarError(f"Problem running mullvad command: {arg}", cause=exc) from exc
        if code != 0:
            raise BarError(f"mullvad command failed with nonzero status: {code}")

    async def toggle_connection(self, status):
        """Disconnect when connected, connect when disconnected."""
        if status.connection is Connection.CONNECTED:
            await self._run("disconnect")
        elif status.connection is Connection.DISCONNECTED:
            await self._run("connect")