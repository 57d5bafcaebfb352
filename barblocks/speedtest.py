"""Ping, download and upload speeds measured by ``speedtest-cli``."""

from __future__ import annotations

import asyncio
import json
import subprocess
from dataclasses import dataclass

from .errors import BarError

DEFAULT_FORMAT = " ^icon_ping $ping ^icon_net_down $speed_down ^icon_net_up $speed_up "
DEFAULT_INTERVAL = 1800

_WRONG_JSON = "'speedtest-cli' produced wrong JSON"


def _number(data, key):
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BarError(_WRONG_JSON, cause=f"missing or invalid field `{key}`")
    return float(value)


@dataclass(frozen=True)
class SpeedtestResult:
    """One measurement: speeds in bits per second, ping in milliseconds."""

    download: float
    upload: float
    ping: float

    @classmethod
    def from_json(cls, text):
        """Parse the output of ``speedtest-cli --json``."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BarError(_WRONG_JSON, cause=exc) from exc
        if not isinstance(data, dict):
            raise BarError(_WRONG_JSON, cause="expected a JSON object")
        return cls(
            download=_number(data, "download"),
            upload=_number(data, "upload"),
            ping=_number(data, "ping"),
        )

    def ping_seconds(self):
        """The ping delay in seconds."""
        return self.ping * 1e-3


async def run_speedtest():
    """Run ``speedtest-cli --json`` and return its measurement."""
    try:
        process = await asyncio.create_subprocess_exec(
            "speedtest-cli",
            "--json",
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
        )
        stdout, _ = await process.communicate()
    except OSError as exc:
        raise BarError("failed to run 'speedtest-cli'", cause=exc) from exc
    try:
        text = stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BarError("'speedtest-cli' produced non-UTF8 output", cause=exc) from exc
    return SpeedtestResult.from_json(text)