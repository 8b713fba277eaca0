"""Dual-mode output — Rich renderables for humans, JSON for agents."""

from __future__ import annotations

import json
from typing import Any, Callable, Sequence

from rich.console import Console, RenderableType
from rich.padding import Padding
from rich.rule import Rule
from rich.style import Style
from rich.table import Table
from rich.text import Text

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
    output_blocks_adapter,
)

# Human output goes to stdout; in JSON mode, human messages go to stderr
_console = Console()
_err_console = Console(stderr=True)

CODE_STYLE = Style(bold=True, color="bright_white", bgcolor="grey23")
TEMPORARY_STYLE = CODE_STYLE + Style(underline=True, italic=True)
LINK_STYLE = Style(color="cyan", underline=True)
ECHO_STYLE = Style(bold=True, color="magenta")

# Maps a code span's literal text to a textual action string, e.g.
# "app.click_code('help')". None leaves spans unclickable.
CodeAction = Callable[[str], str]


def render_spans(
    spans: Sequence[TextSpan | CodeSpan | LinkSpan],
    code_action: CodeAction | None = None,
) -> Text:
    """Build a rich Text from inline spans."""
    text = Text()
    for span in spans:
        if isinstance(span, CodeSpan):
            style = TEMPORARY_STYLE if span.temporary else CODE_STYLE
            if code_action is not None:
                style = style + Style.from_meta({"@click": code_action(span.text)})
            text.append(span.text, style=style)
        elif isinstance(span, LinkSpan):
            text.append(span.text, style=LINK_STYLE + Style(link=span.href))
        else:
            text.append(span.text, style=Style(bold=span.bold or None, italic=span.italic or None))
    return text


def render_block(block: OutputBlock, code_action: CodeAction | None = None) -> RenderableType:
    """Turn one output block into a rich renderable."""
    if isinstance(block, EchoBlock):
        return Text.assemble(("> ", ECHO_STYLE), (block.command, Style(bold=True)))

    if isinstance(block, ErrorBlock):
        return Text.assemble(("✗ ", "bold red"), (block.text, "red"))

    if isinstance(block, HeadingBlock):
        text = render_spans(block.spans, code_action)
        text.stylize("bold underline" if block.level == 1 else "bold")
        return text

    if isinstance(block, ListItemBlock):
        bullet = f"{block.number}. " if block.ordered and block.number is not None else "• "
        text = Text("  " * block.depth + bullet, style="dim")
        text.append_text(render_spans(block.spans, code_action))
        return text

    if isinstance(block, CodeBlock):
        return Padding(Text(block.text, style="cyan"), (0, 2))

    if isinstance(block, RuleBlock):
        return Rule(style="dim")

    if isinstance(block, ParagraphBlock):
        return render_spans(block.spans, code_action)

    raise TypeError(f"Unsupported block: {block!r}")


class OutputFormatter:
    """Routes output to Rich (human) or JSON (agent) depending on mode."""

    def __init__(self, json_mode: bool = False, console: Console | None = None) -> None:
        self.json_mode = json_mode
        self.console = console or _console
        self.err_console = _err_console

    # ── JSON output ──────────────────────────────────────────────

    def json(self, data: Any, status: str = "success") -> None:
        """Print structured JSON to stdout."""
        envelope = {"status": status, "data": data}
        print(json.dumps(envelope, indent=2, default=str))

    def json_error(self, message: str, code: int = 1) -> None:
        """Print a JSON error envelope to stdout."""
        envelope = {"status": "error", "error": {"message": message, "code": code}}
        print(json.dumps(envelope, indent=2))

    # ── Human output ─────────────────────────────────────────────

    def blocks(self, blocks: Sequence[OutputBlock]) -> None:
        """Print rendered output blocks, or their JSON form."""
        if self.json_mode:
            self.json(output_blocks_adapter.dump_python(list(blocks), mode="json"))
            return
        for block in blocks:
            self.console.print(render_block(block))

    def success(self, message: str) -> None:
        """Print a success message."""
        if self.json_mode:
            return
        self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        """Print a warning."""
        console = self.err_console if self.json_mode else self.console
        console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message."""
        if self.json_mode:
            return
        self.console.print(f"[dim]ℹ[/dim] {message}")

    def table(
        self,
        title: str,
        columns: list[tuple[str, str]],
        rows: list[list[str]],
        data_for_json: list[dict[str, Any]] | None = None,
    ) -> None:
        """Print a table (Rich for humans, JSON for agents).

        columns: list of (header, style) tuples
        rows: list of row data (strings)
        data_for_json: if provided, used as the JSON payload instead of rows
        """
        if self.json_mode:
            self.json(data_for_json or [dict(zip([c[0] for c in columns], r)) for r in rows])
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header, style in columns:
            table.add_column(header, style=style)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

