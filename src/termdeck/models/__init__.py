"""Pydantic models shared by the console components."""

from termdeck.models.blocks import (
    CodeBlock,
    CodeSpan,
    EchoBlock,
    ErrorBlock,
    HeadingBlock,
    LinkSpan,
    ListItemBlock,
    OutputBlock,
    ParagraphBlock,
    RuleBlock,
    TextSpan,
    block_text,
)
from termdeck.models.state import AutocompleteState, BracketExpression
from termdeck.models.suggestion import Suggestion

__all__ = [
    "AutocompleteState",
    "BracketExpression",
    "CodeBlock",
    "CodeSpan",
    "EchoBlock",
    "ErrorBlock",
    "HeadingBlock",
    "LinkSpan",
    "ListItemBlock",
    "OutputBlock",
    "ParagraphBlock",
    "RuleBlock",
    "Suggestion",
    "TextSpan",
    "block_text",
]
