"""Rendered output blocks — a tagged variant model discriminated by ``kind``.

A result text is rendered into a list of blocks; paragraph-like blocks carry
inline spans. Blocks are frozen: the output log only ever appends them.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from termdeck.models.base import TermdeckModel


# ── Inline spans ─────────────────────────────────────────────────


class TextSpan(TermdeckModel):
    kind: Literal["text"] = "text"
    text: str
    bold: bool = False
    italic: bool = False


class CodeSpan(TermdeckModel):
    """Code-styled text; clicking it submits the literal text as a command.

    ``temporary`` marks the ``~text~`` form, used for links to commands on
    things that have not been saved yet.
    """

    kind: Literal["code"] = "code"
    text: str
    temporary: bool = False


class LinkSpan(TermdeckModel):
    kind: Literal["link"] = "link"
    href: str
    text: str
    external: bool = True


Span = Annotated[Union[TextSpan, CodeSpan, LinkSpan], Field(discriminator="kind")]


# ── Blocks ───────────────────────────────────────────────────────


class EchoBlock(TermdeckModel):
    """Restatement of a submitted command, shown before its result."""

    kind: Literal["echo"] = "echo"
    command: str


class ParagraphBlock(TermdeckModel):
    kind: Literal["paragraph"] = "paragraph"
    spans: tuple[Span, ...] = ()


class HeadingBlock(TermdeckModel):
    kind: Literal["heading"] = "heading"
    level: int = 1
    spans: tuple[Span, ...] = ()


class ListItemBlock(TermdeckModel):
    kind: Literal["list_item"] = "list_item"
    depth: int = 0
    ordered: bool = False
    number: int | None = None
    spans: tuple[Span, ...] = ()


class CodeBlock(TermdeckModel):
    kind: Literal["code_block"] = "code_block"
    text: str


class RuleBlock(TermdeckModel):
    kind: Literal["rule"] = "rule"


class ErrorBlock(TermdeckModel):
    """A single-line error message, written as ``! message`` in result text."""

    kind: Literal["error"] = "error"
    text: str


OutputBlock = Annotated[
    Union[
        EchoBlock,
        ParagraphBlock,
        HeadingBlock,
        ListItemBlock,
        CodeBlock,
        RuleBlock,
        ErrorBlock,
    ],
    Field(discriminator="kind"),
]

output_blocks_adapter: TypeAdapter[list[OutputBlock]] = TypeAdapter(list[OutputBlock])


def span_text(span: TextSpan | CodeSpan | LinkSpan) -> str:
    """Return the visible text of an inline span."""
    return span.text


def block_text(block: TermdeckModel) -> str:
    """Return the visible plain text of a block, without styling."""
    if isinstance(block, EchoBlock):
        return f"> {block.command}"
    if isinstance(block, (CodeBlock, ErrorBlock)):
        return block.text
    if isinstance(block, RuleBlock):
        return ""
    spans = getattr(block, "spans", ())
    return "".join(span_text(s) for s in spans)
