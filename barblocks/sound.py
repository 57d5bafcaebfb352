"""Volume block logic: icons, output-name mappings and values."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from .errors import BarError, ErrorKind


class SoundDriver(Enum):
    """Which sound system to query."""

    AUTO = "auto"
    ALSA = "alsa"
    PULSEAUDIO = "pulseaudio"


class DeviceKind(Enum):
    """Whether the device plays sound or records it."""

    SINK = "sink"
    SOURCE = "source"


_HEADPHONE_FORM_FACTORS = frozenset({"headset", "headphone", "hands-free", "portable"})

_REFERENCE = re.compile(r"\$(?:(\$)|\{([^}]*)\}|([_0-9a-zA-Z]+))")


def _compile(pattern, what):
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise BarError(
            f"Failed to parse `{pattern}` in {what} as regex", ErrorKind.CONFIG, exc
        ) from exc


def _group_text(match, name):
    if name.isascii() and name.isdigit():
        index = int(name)
        if index > match.re.groups:
            return ""
        return match.group(index) or ""
    if name in match.re.groupindex:
        return match.group(name) or ""
    return ""


def _expand(match, replacement):
    def substitute(ref):
        if ref.group(1) is not None:
            return "$"
        name = ref.group(2) if ref.group(2) is not None else ref.group(3)
        return _group_text(match, name)

    return _REFERENCE.sub(substitute, replacement)


def regex_replace(pattern, text, replacement):
    """Replace the first match of ``pattern`` in ``text``.

    ``replacement`` may refer to groups as ``$1``, ``$name`` or ``${name}``;
    ``$$`` stands for a literal dollar sign and unknown groups expand to nothing.
    """
    regex = _compile(pattern, "pattern")
    return regex.sub(lambda m: _expand(m, replacement), text, count=1)


@dataclass
class OutputMappings:
    """Renames of output devices, by exact name or by regular expression."""

    pairs: list = field(default_factory=list)
    use_regex: bool = True

    @classmethod
    def from_pairs(cls, pairs, use_regex=True):
        """Build mappings from ``(key, replacement)`` pairs or a mapping."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        if use_regex:
            compiled = [(_compile(key, "mappings"), value) for key, value in items]
        else:
            compiled = [(key, value) for key, value in items]
        return cls(compiled, use_regex)

    def apply(self, name):
        """Return ``name`` after applying the first matching mapping."""
        if self.use_regex:
            for regex, mapped in self.pairs:
                if regex.search(name):
                    return regex_replace(regex, name, mapped)
            return name
        for exact, mapped in self.pairs:
            if name == exact:
                return mapped
        return name


def map_active_port(port, mappings):
    """Map an active port name; a mapping to an empty string makes it absent."""
    if port is None:
        return None
    for pattern, mapped in mappings:
        regex = _compile(pattern, "active_port_mappings")
        if regex.search(port):
            result = regex_replace(regex, port, mapped)
            return result or None
    return port


def clamp_step_width(step_width):
    """Limit the scroll step to the range 0..=50."""
    return min(max(step_width, 0), 50)


def is_headphones(form_factor, active_port):
    """Whether the device looks like headphones.

    The form factor decides when present; otherwise the active port name does.
    """
    if form_factor is None:
        return active_port is not None and "headphones" in active_port
    return form_factor in _HEADPHONE_FORM_FACTORS


def volume_icon(muted, device_kind, headphones_indicator, form_factor, active_port):
    """Name of the icon for the device's current state."""
    if (
        headphones_indicator
        and device_kind is DeviceKind.SINK
        and is_headphones(form_factor, active_port)
    ):
        return "headphones"
    if device_kind is DeviceKind.SOURCE:
        return "microphone_muted" if muted else "microphone"
    return "volume_muted" if muted else "volume"


def sound_values(
    volume,
    muted,
    output_name,
    output_description=None,
    active_port=None,
    show_volume_when_muted=False,
):
    """Placeholder values of the block, without the icon."""
    values = {
        "volume": volume,
        "output_name": output_name,
        "output_description": (
            output_description if output_description is not None else output_name
        ),
    }
    if active_port is not None:
        values["active_port"] = active_port
    if muted and not show_volume_when_muted:
        del values["volume"]
    return values