"""VPN driver using the ``nordvpn`` command."""

from __future__ import annotations

import asyncio
import re
import subprocess

from .errors import BarError
from .vpn import DISCONNECTED, ERROR, Connection, VpnStatus

_HOSTNAME = re.compile(r"^.*Hostname:\s+([a-z]{2}).*$")


def _find_line(lines, needle):
    return next((line for line in lines if needle in line), None)


def parse_nordvpn_status(text):
    """Read the connection status from ``nordvpn status`` output."""
    lines = text.splitlines()
    status_line = _find_line(lines, "Status:")
    if status_line is None:
        return ERROR
    if status_line.endswith("Disconnected"):
        return DISCONNECTED
    if status_line.endswith("Connected"):
        country_line = _find_line(lines, "Country:")
        country = country_line.rsplit(": ", 1)[-1] if country_line is not None else ""
        code = None
        hostname_line = _find_line(lines, "Hostname:")
        if hostname_line is not None:
            match = _HOSTNAME.match(hostname_line)
            if match:
                code = match.group(1)
        return VpnStatus.connected(country, code)
    return ERROR


class NordVpnDriver:
    """Queries and toggles NordVPN."""

    async def get_status(self):
        """Current connection status."""
        try:
            process = await asyncio.create_subprocess_exec(
                "nordvpn",
                "status",
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
            )
            stdout, _ = await process.communicate()
        except OSError as exc:
            raise BarError("Problem running nordvpn command", cause=exc) from exc
        try:
            text = stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BarError("nordvpn produced non-UTF8 output", cause=exc) from exc
        return parse_nordvpn_status(text)

    async def _run(self, arg):
        try:
            process = await asyncio.create_subprocess_exec(
                "nordvpn",
                arg,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
            )
            await process.wait()
        except OSError as exc:
            raise BarError(f"Problem running nordvpn command: {arg}", cause=exc) from exc

    async def toggle_connection(self, status):
        """Disconnect when connected, connect when disconnected."""
        if status.connection is Connection.CONNECTED:
            await self._run("disconnect")
        elif status.connection is Connection.DISCONNECTED:
            await self._run("connect")