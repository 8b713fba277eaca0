"""Result text -> output blocks, via markdown-it-py with two console extensions.

* ``! message`` on its own line is an error block, not a paragraph.
* ``~text~`` is a temporary command link, shown code-styled and clickable.

Everything else is CommonMark. Ordinary links are marked external.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Sequence

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from termdeck.core.exceptions import RenderError
from termdeck.models.blocks import (
    CodeBlock,
    CodeSpan,
    ErrorBlock,
    HeadingBlock,
    LinkSpan,
    ListItemBlock,
    OutputBlock,
    ParagraphBlock,
    RuleBlock,
    TextSpan,
)

ERROR_MARKER = "! "


def error_line_rule(state: StateBlock, start_line: int, end_line: int, silent: bool) -> bool:
    """Block rule: a line starting with ``! `` becomes an ``error_line`` token."""
    if state.sCount[start_line] - state.blkIndent >= 4:
        return False

    pos = state.bMarks[start_line] + state.tShift[start_line]
    maximum = state.eMarks[start_line]
    if not state.src.startswith(ERROR_MARKER, pos, maximum):
        return False
    if silent:
        return True

    state.line = start_line + 1
    token = state.push("error_line", "p", 0)
    token.map = [start_line, state.line]
    token.markup = ERROR_MARKER
    token.content = state.src[pos + len(ERROR_MARKER):maximum].strip()
    return True


def temporary_link_rule(state: StateInline, silent: bool) -> bool:
    """Inline rule: ``~text~`` or ``~~text~~`` becomes a ``temporary_link`` token."""
    start = state.pos
    if state.src[start] != "~":
        return False

    marker = "~~" if state.src.startswith("~~", start) else "~"
    content_start = start + len(marker)
    end = state.src.find(marker, content_start, state.posMax)
    if end <= content_start:
        return False

    content = state.src[content_start:end]
    if "\n" in content:
        return False

    if not silent:
        token = state.push("temporary_link", "code", 0)
        token.content = content
        token.markup = marker
    state.pos = end + len(marker)
    return True


def build_parser() -> MarkdownIt:
    """Return a CommonMark parser with the console's block and inline rules."""
    md = MarkdownIt("commonmark")
    md.block.ruler.before("lheading", "error_line", error_line_rule, {"alt": ["paragraph"]})
    md.inline.ruler.before("emphasis", "temporary_link", temporary_link_rule)
    return md


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    return build_parser()


def render(raw_text: str) -> list[OutputBlock]:
    """Render engine result text into output blocks."""
    try:
        tokens = _parser().parse(raw_text or "")
    except Exception as e:
        raise RenderError(f"Failed to parse result text: {e}") from e
    return _blocks(tokens)


def render_error(message: str) -> list[OutputBlock]:
    """Render a message through the ``! `` error convention, one block per line."""
    lines = [line for line in str(message).splitlines() if line.strip()] or ["Unknown error"]
    return render("\n".join(f"{ERROR_MARKER}{line.strip()}" for line in lines))


def _blocks(tokens: Sequence[Token]) -> list[OutputBlock]:
    blocks: list[OutputBlock] = []
    lists: list[dict[str, Any]] = []
    item_pending = False

    for index, token in enumerate(tokens):
        kind = token.type

        if kind == "error_line":
            blocks.append(ErrorBlock(text=token.content))
        elif kind in ("bullet_list_open", "ordered_list_open"):
            ordered = kind == "ordered_list_open"
            start = int(token.attrGet("start") or 1) if ordered else None
            lists.append({"ordered": ordered, "number": start})
        elif kind in ("bullet_list_close", "ordered_list_close"):
            lists.pop()
        elif kind == "list_item_open":
            item_pending = True
        elif kind == "inline":
            spans = tuple(_spans(token.children or []))
            parent = tokens[index - 1] if index > 0 else None
            if parent is not None and parent.type == "heading_open":
                blocks.append(HeadingBlock(level=int(parent.tag[1:]), spans=spans))
            elif lists and item_pending:
                current = lists[-1]
                blocks.append(
                    ListItemBlock(
                        depth=len(lists) - 1,
                        ordered=current["ordered"],
                        number=current["number"],
                        spans=spans,
                    )
                )
                if current["ordered"]:
                    current["number"] += 1
                item_pending = False
            else:
                blocks.append(ParagraphBlock(spans=spans))
        elif kind in ("fence", "code_block"):
            blocks.append(CodeBlock(text=token.content.rstrip("\n")))
        elif kind == "hr":
            blocks.append(RuleBlock())
        elif kind == "html_block":
            blocks.append(ParagraphBlock(spans=(TextSpan(text=token.content.strip()),)))

    return blocks


def _spans(children: Sequence[Token]) -> list[TextSpan | CodeSpan | LinkSpan]:
    spans: list[TextSpan | CodeSpan | LinkSpan] = []
    bold = 0
    italic = 0
    link: dict[str, Any] | None = None

    def emit_text(text: str) -> None:
        if not text:
            return
        if link is not None:
            link["parts"].append(text)
            return
        last = spans[-1] if spans else None
        if (
            isinstance(last, TextSpan)
            and last.bold == (bold > 0)
            and last.italic == (italic > 0)
        ):
            spans[-1] = TextSpan(text=last.text + text, bold=last.bold, italic=last.italic)
        else:
            spans.append(TextSpan(text=text, bold=bold > 0, italic=italic > 0))

    for child in children:
        kind = child.type
        if kind in ("text", "text_special", "html_inline"):
            emit_text(child.content)
        elif kind == "softbreak":
            emit_text(" ")
        elif kind == "hardbreak":
            emit_text("\n")
        elif kind == "strong_open":
            bold += 1
        elif kind == "strong_close":
            bold -= 1
        elif kind == "em_open":
            italic += 1
        elif kind == "em_close":
            italic -= 1
        elif kind == "code_inline":
            spans.append(CodeSpan(text=child.content))
        elif kind == "temporary_link":
            spans.append(CodeSpan(text=child.content, temporary=True))
        elif kind == "link_open":
            link = {"href": str(child.attrGet("href") or ""), "parts": []}
        elif kind == "link_close" and link is not None:
            href = link["href"]
            text = "".join(link["parts"]) or href
            link = None
            spans.append(LinkSpan(href=href, text=text))
        elif kind == "image":
            emit_text(child.content)

    return spans
