"""Typed input events routed into a console session.

Front ends translate widget callbacks into these; hosts embedding the
console post the signal events directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class PromptEdited:
    text: str


@dataclass(frozen=True)
class PromptSubmitted:
    text: str


@dataclass(frozen=True)
class TabPressed:
    pass


@dataclass(frozen=True)
class EscapePressed:
    pass


@dataclass(frozen=True)
class PrintableKey:
    """A printable key typed while some other widget had focus."""

    character: str
    prompt_focused: bool = False
    modifiers: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class CodeClicked:
    text: str


@dataclass(frozen=True)
class SuggestionChosen:
    text: str


@dataclass(frozen=True)
class SuggestionHighlighted:
    index: int
    text: str


# ── Host signals ─────────────────────────────────────────────────


@dataclass(frozen=True)
class SubmitCommand:
    command: str


@dataclass(frozen=True)
class ExportRequested:
    name: str


@dataclass(frozen=True)
class ImportRequested:
    path: str


ConsoleEvent = Union[
    PromptEdited,
    PromptSubmitted,
    TabPressed,
    EscapePressed,
    PrintableKey,
    CodeClicked,
    SuggestionChosen,
    SuggestionHighlighted,
    SubmitCommand,
    ExportRequested,
    ImportRequested,
]
