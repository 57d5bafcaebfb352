"""Error type shared by all blocks."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Broad category of an error."""

    CONFIG = "config"
    FORMAT = "format"
    OTHER = "other"


class BarError(Exception):
    """An error with an optional message, cause and originating block."""

    def __init__(self, message=None, kind=ErrorKind.OTHER, cause=None, block=None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.cause = cause
        self.block = block
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    @classmethod
    def format_error(cls, message, cause=None):
        """Build an error about a malformed format string."""
        return cls(message, ErrorKind.FORMAT, cause)

    @classmethod
    def config_error(cls, cause=None):
        """Build a configuration error without a message of its own."""
        return cls(None, ErrorKind.CONFIG, cause)

    def in_block(self, block, block_id):
        """Attach the originating block name and id, returning the same error."""
        self.block = (block, block_id)
        return self

    def __str__(self):
        parts = []
        if self.block is not None:
            if self.kind in (ErrorKind.CONFIG, ErrorKind.FORMAT):
                parts.append("Configuration error")
            else:
                parts.append("Error")
            parts.append(f" in {self.block[0]}")
            if self.message is not None:
                parts.append(f": {self.message}")
        else:
            parts.append(self.message if self.message is not None else "Error")
        if self.cause is not None:
            parts.append(f". (Cause: {self.cause})")
        return "".join(parts)


def require(value, message=None, kind=ErrorKind.OTHER):
    """Return ``value``, raising a :class:`BarError` when it is ``None``."""
    if value is None:
        raise BarError(message, kind)
    return value