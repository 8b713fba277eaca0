"""Locate ``[...]`` placeholder expressions in command text."""

from __future__ import annotations

from termdeck.models.state import BracketExpression


def locate(text: str) -> BracketExpression | None:
    """Return the leftmost, shortest non-nested ``[...]`` span, or None.

    A ``[`` seen before the closing ``]`` restarts the span, so ``"[a [b]"``
    yields ``[b]``. An unbalanced ``[`` is not an expression.
    """
    start: int | None = None
    for index, char in enumerate(text or ""):
        if char == "[":
            start = index
        elif char == "]" and start is not None:
            return BracketExpression(start=start, end=index + 1, raw=text[start:index + 1])
    return None


def active_word(text: str) -> str:
    """Return the part of ``text`` before the first ``[``."""
    return (text or "").split("[", 1)[0]


def fill_placeholder(text: str, start: int, end: int, value: str) -> str:
    """Write ``value`` between the brackets of the span ``text[start:end]``."""
    return f"{text[:start]}[{value}]{text[end:]}"
