"""Interactive REPL — prompt_toolkit-based line console over a console session."""

from __future__ import annotations

import asyncio
from typing import Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from rich.console import Console
from rich.panel import Panel

from termdeck.cli.completer import EngineCompleter
from termdeck.cli.main import ConsoleContext
from termdeck.console.events import PromptSubmitted
from termdeck.console.session import ConsoleSession
from termdeck.console.view import NullView
from termdeck.core.config import get_history_path
from termdeck.models.blocks import OutputBlock
from termdeck.output.formatter import render_block

console = Console()

QUIT_COMMANDS = {"/quit", "/exit"}


class ReplView(NullView):
    """Prints output blocks as they are appended; the prompt is redrawn per line."""

    def __init__(self, out: Console | None = None) -> None:
        self.out = out or console

    def write_blocks(self, blocks: Sequence[OutputBlock]) -> None:
        for block in blocks:
            self.out.print(render_block(block))


def _restore_selection(prompt_session: PromptSession[str], session: ConsoleSession) -> None:
    """Re-select the placeholder a redirected submission left in the prompt."""
    buffer = prompt_session.default_buffer
    selection = session.prompt.selection
    if selection is None:
        return
    start, end = selection
    buffer.cursor_position = start
    buffer.start_selection()
    buffer.cursor_position = end
    if session.autocomplete.is_open:
        buffer.start_completion(select_first=False)


async def run_repl(ctx: ConsoleContext, out: Console | None = None) -> None:
    """Run the REPL loop until EOF, Ctrl-C or /quit."""
    out = out or console
    config = ctx.get_config()
    session = ConsoleSession(
        ctx.get_engine(),
        view=ReplView(out),
        max_suggestions=config["display"]["max_suggestions"],
    )

    out.print()
    out.print(
        Panel(
            "[bold cyan]termdeck[/bold cyan] — line console\n"
            "Press [bold]Tab[/bold] for suggestions. Type [bold]/quit[/bold] to exit.",
            border_style="cyan",
        )
    )
    await session.start(show_welcome=config["display"]["show_welcome"])
    out.print()

    history = FileHistory(str(get_history_path())) if config["history"]["enabled"] else InMemoryHistory()
    prompt_session: PromptSession[str] = PromptSession(
        completer=EngineCompleter(session.autocomplete),
        history=history,
        complete_while_typing=False,
    )

    while True:
        try:
            text = await prompt_session.prompt_async(
                config["display"]["prompt"],
                default=session.prompt.text,
                pre_run=lambda: _restore_selection(prompt_session, session),
            )
            if text.strip() in QUIT_COMMANDS:
                raise EOFError()

            await session.handle(PromptSubmitted(text))
            if session.prompt.selection is None:
                out.print()  # blank line between outputs

        except (EOFError, KeyboardInterrupt):
            out.print("\n[dim]Goodbye![/dim]")
            break


def launch_repl(ctx: ConsoleContext) -> None:
    """Launch the interactive REPL session."""
    asyncio.run(run_repl(ctx))
