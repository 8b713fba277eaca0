"""Mutable controller state and derived text spans."""

from __future__ import annotations

from pydantic import BaseModel, Field

from termdeck.models.base import TermdeckModel
from termdeck.models.suggestion import Suggestion


class BracketExpression(TermdeckModel):
    """A ``[...]`` placeholder span; ``end`` is exclusive."""

    start: int
    end: int
    raw: str

    @property
    def inner(self) -> str:
        return self.raw[1:-1]


class AutocompleteState(BaseModel):
    """Suggestion list state owned by the autocomplete controller."""

    is_open: bool = False
    cursor_index: int = -1
    results: list[Suggestion] = Field(default_factory=list)
