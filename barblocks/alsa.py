"""ALSA sound device driven by the ``amixer`` and ``alsactl`` commands."""

from __future__ import annotations

import asyncio
import subprocess

from .errors import BarError


def parse_amixer_output(output):
    """Read ``(volume, muted)`` from the last line of ``amixer get`` output."""
    lines = output.strip().splitlines()
    if not lines:
        raise BarError("could not get sound info")
    fields = [
        token.strip("[]%")
        for token in lines[-1].split()
        if token.startswith("[") and "dB" not in token
    ]
    if not fields:
        raise BarError("could not get volume")
    volume_text = fields[0]
    if not (volume_text.isascii() and volume_text.isdigit()):
        raise BarError("could not parse volume to u32")
    muted = len(fields) > 1 and fields[1] == "off"
    return int(volume_text), muted


def capped_volume(volume, step, max_vol=None):
    """Volume after a step, never below zero and not above ``max_vol`` if given."""
    new_volume = max(0, volume + step)
    if max_vol is not None:
        new_volume = min(new_volume, max_vol)
    return new_volume


class AlsaDevice:
    """An ALSA simple mixer control."""

    def __init__(self, name="Master", device="default", natural_mapping=False):
        self.name = name
        self.device = device
        self.natural_mapping = natural_mapping
        self.volume = 0
        self.muted = False
        self.output_description = None
        self.active_port = None
        self.form_factor = None
        self._monitor = None

    @property
    def output_name(self):
        return self.name

    def amixer_args(self, *args):
        """Arguments for ``amixer`` addressing this device."""
        prefix = ["-M"] if self.natural_mapping else []
        return [*prefix, "-D", self.device, *args]

    async def _amixer(self, args, message):
        try:
            process = await asyncio.create_subprocess_exec(
                "amixer",
                *args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
            stdout, _ = await process.communicate()
        except OSError as exc:
            raise BarError(message, cause=exc) from exc
        return stdout.decode("utf-8", errors="replace")

    async def get_info(self):
        """Refresh volume and mute state."""
        output = await self._amixer(
            self.amixer_args("get", self.name),
            "could not run amixer to get sound info",
        )
        self.volume, self.muted = parse_amixer_output(output)

    async def set_volume(self, step, max_vol=None):
        """Change the volume by ``step`` percent, capped at ``max_vol``."""
        volume = capped_volume(self.volume, step, max_vol)
        await self._amixer(
            self.amixer_args("set", self.name, f"{volume}%"),
            "failed to set volume",
        )
        self.volume = volume

    async def toggle(self):
        """Toggle mute."""
        await self._amixer(
            self.amixer_args("set", self.name, "toggle"),
            "failed to toggle mute",
        )
        self.muted = not self.muted

    async def wait_for_update(self):
        """Wait until ``alsactl monitor`` reports a change."""
        if self._monitor is None:
            try:
                self._monitor = await asyncio.create_subprocess_exec(
                    "alsactl",
                    "monitor",
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                )
            except OSError as exc:
                raise BarError("Failed to start alsactl monitor", cause=exc) from exc
        try:
            await self._monitor.stdout.read(1024)
        except OSError as exc:
            raise BarError("Failed to read stdbuf output", cause=exc) from exc

    async def close(self):
        """Stop the monitor process, if running."""
        monitor, self._monitor = self._monitor, None
        if monitor is None or monitor.returncode is not None:
            return
        monitor.terminate()
        await monitor.wait()