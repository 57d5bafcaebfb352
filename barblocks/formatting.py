"""Rendered text fragments and their metadata."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Metadata:
    """Per-fragment styling and click-target information."""

    instance: str | None = None
    underline: bool = False
    italic: bool = False

    def is_default(self):
        """Whether no metadata is set."""
        return self == Metadata()


@dataclass
class Fragment:
    """A piece of rendered text."""

    text: str = ""
    metadata: Metadata = field(default_factory=Metadata)

    def formatted_text(self):
        """Return the text wrapped in pango italic/underline tags as needed."""
        text = self.text
        if self.metadata.underline:
            text = f"<u>{text}</u>"
        if self.metadata.italic:
            text = f"<i>{text}</i>"
        return text