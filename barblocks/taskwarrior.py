"""Counting tasks in taskwarrior."""

from __future__ import annotations

import asyncio
import re
import subprocess
from dataclasses import dataclass

from .errors import BarError, ErrorKind
from .state import State

DEFAULT_INTERVAL = 600
DEFAULT_WARNING_THRESHOLD = 10
DEFAULT_CRITICAL_THRESHOLD = 20
DEFAULT_FORMAT = " $icon $count.eng(w:1) "
DEFAULT_DATA_LOCATION = "~/.task"

_FILTER_FIELDS = {"name", "filter"}
_COUNT = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class TaskFilter:
    """A named taskwarrior filter expression."""

    name: str
    filter: str

    @classmethod
    def from_dict(cls, data):
        """Build a filter from a configuration table, rejecting unknown keys."""
        unknown = set(data) - _FILTER_FIELDS
        if unknown:
            raise BarError(
                f"unknown field(s) in filter: {', '.join(sorted(unknown))}",
                ErrorKind.CONFIG,
            )
        missing = sorted(_FILTER_FIELDS - set(data))
        if missing:
            raise BarError(f"missing field `{missing[0]}` in filter", ErrorKind.CONFIG)
        return cls(name=str(data["name"]), filter=str(data["filter"]))


DEFAULT_FILTERS = (TaskFilter("pending", "-COMPLETED -DELETED"),)


class FilterCycle:
    """Endless rotation through the configured filters."""

    def __init__(self, filters=DEFAULT_FILTERS):
        self.filters = tuple(filters)
        if not self.filters:
            raise BarError("`filters` is empty")
        self._index = 0

    @property
    def current(self):
        """The filter currently shown."""
        return self.filters[self._index]

    def advance(self):
        """Move to the next filter, wrapping around, and return it."""
        self._index = (self._index + 1) % len(self.filters)
        return self.current


def parse_task_count(output):
    """Read the number printed by ``task ... count``."""
    if isinstance(output, bytes):
        try:
            output = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BarError(
                "failed to get the number of tasks from taskwarrior (invalid UTF-8)",
                cause=exc,
            ) from exc
    text = output.strip()
    if not _COUNT.fullmatch(text) or int(text) > _U32_MAX:
        raise BarError(
            "could not parse the result of taskwarrior",
            cause=f"invalid digit in {text!r}",
        )
    return int(text)


def format_kind(count):
    """Which configured format applies to ``count`` tasks."""
    if count == 0:
        return "format_everything_done"
    if count == 1:
        return "format_singular"
    return "format"


def task_state(
    count,
    warning_threshold=DEFAULT_WARNING_THRESHOLD,
    critical_threshold=DEFAULT_CRITICAL_THRESHOLD,
):
    """Widget state for the given number of tasks."""
    if count >= critical_threshold:
        return State.CRITICAL
    if count >= warning_threshold:
        return State.WARNING
    return State.IDLE


async def count_tasks(filter_expr):
    """Ask taskwarrior how many tasks match ``filter_expr``."""
    try:
        process = await asyncio.create_subprocess_exec(
            "task",
            "rc.gc=off",
            filter_expr,
            "count",
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
        )
        stdout, _ = await process.communicate()
    except OSError as exc:
        raise BarError(
            "failed to run taskwarrior for getting the number of tasks", cause=exc
        ) from exc
    return parse_task_count(stdout)