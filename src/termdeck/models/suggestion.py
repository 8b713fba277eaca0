"""Autocomplete suggestion model."""

from __future__ import annotations

from typing import Any, Sequence

from termdeck.models.base import TermdeckModel


class Suggestion(TermdeckModel):
    """One autocomplete entry: the text to insert and what it does."""

    suggestion: str
    description: str = ""

    @classmethod
    def from_pair(cls, pair: Sequence[Any]) -> "Suggestion":
        """Build from an engine ``(suggestion, description)`` pair."""
        suggestion, description = pair
        return cls(suggestion=str(suggestion), description=str(description or ""))
