"""Pango markup escaping."""

from __future__ import annotations

import re
import unicodedata

_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&#39;",
}

_SPECIAL = re.compile("[&<>']")


def _is_extend(ch):
    return unicodedata.category(ch) in ("Mn", "Me", "Mc", "Cf")


def _previous_base(text, index):
    for ch in reversed(text[:index]):
        if not _is_extend(ch):
            return ch
    return None


def _joins_word(text, start, end):
    """Whether an apostrophe sits inside a word, keeping it in one segment."""
    before = _previous_base(text, start)
    after = text[end:end + 1]
    if before is None or not after:
        return False
    if before.isalpha() and after.isalpha():
        return True
    return before.isdigit() and after.isdigit()


def _replace(match):
    ch = match.group()
    text = match.string
    following = text[match.end():match.end() + 1]
    if following and _is_extend(following):
        return ch
    if ch == "'" and _joins_word(text, match.start(), match.end()):
        return ch
    return _ENTITIES[ch]


def pango_escape_segments(segments):
    """Escape an iterable of text segments, replacing segments that are special characters."""
    return "".join(_ENTITIES.get(segment, segment) for segment in segments)


def pango_escape(text):
    """Escape ``text`` for pango markup, treating it as a sequence of word-bound segments."""
    return _SPECIAL.sub(_replace, text)