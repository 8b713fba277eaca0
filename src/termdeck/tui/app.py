"""Textual full-screen console."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, OptionList, RichLog
from textual.widgets.input import Selection
from textual.widgets.option_list import Option

from termdeck.adapters.protocol import CommandEngine
from termdeck.console.events import (
    CodeClicked,
    ConsoleEvent,
    EscapePressed,
    PrintableKey,
    PromptEdited,
    PromptSubmitted,
    SuggestionChosen,
    SuggestionHighlighted,
    TabPressed,
)
from termdeck.console.prompt import PromptState
from termdeck.console.session import ConsoleSession
from termdeck.models.blocks import OutputBlock
from termdeck.models.state import AutocompleteState
from termdeck.models.suggestion import Suggestion
from termdeck.output.formatter import render_block

if TYPE_CHECKING:
    from termdeck.cli.main import ConsoleContext

logger = logging.getLogger(__name__)

MODIFIER_KEYS = ("ctrl", "alt", "meta", "super", "hyper", "shift")


def click_action(text: str) -> str:
    """Textual action run when a code span is clicked."""
    return f"app.click_code({text!r})"


def suggestion_prompt(item: Suggestion) -> Text:
    return Text.assemble((item.suggestion, "bold"), "  ", (item.description, "dim"))


def step_highlight(cursor_index: int, step: int, count: int) -> int:
    """Next highlighted index, wrapping; Up with nothing highlighted picks the last."""
    if cursor_index < 0:
        return count - 1 if step < 0 else 0
    return (cursor_index + step) % count


class TermdeckApp(App[None]):
    """Prompt at the bottom, suggestions above it, output log filling the rest."""

    TITLE = "termdeck"
    CSS = """
    #main {
        height: 1fr;
    }
    #log {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }
    #suggestions {
        height: auto;
        max-height: 10;
        border: round $secondary;
        display: none;
    }
    #suggestions.open {
        display: block;
    }
    #prompt {
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("tab", "tab_complete", "Complete", priority=True),
        Binding("escape", "close_suggestions", "Close", show=False),
        Binding("up", "suggestion_up", "Previous", show=False),
        Binding("down", "suggestion_down", "Next", show=False),
        Binding("ctrl+l", "clear_log", "Clear"),
        Binding("ctrl+c", "quit", "Quit"),
    ]

    def __init__(
        self,
        engine: CommandEngine,
        config: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.console_config = config or {}
        display = self.console_config.get("display", {})
        self.placeholder = display.get("placeholder", "")
        self.show_welcome = display.get("show_welcome", True)
        self.session = ConsoleSession(
            engine,
            view=self,
            max_suggestions=display.get("max_suggestions", 10),
        )
        self._refresh_task: asyncio.Task[None] | None = None
        self._shown_results: list[Suggestion] = []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="main"):
            yield RichLog(id="log", wrap=True, markup=False, highlight=False)
            yield OptionList(id="suggestions")
        yield Input(placeholder=self.placeholder, id="prompt")
        yield Footer()

    async def on_mount(self) -> None:
        self.focus_prompt()
        await self.session.start(show_welcome=self.show_welcome)

    # ── ConsoleView ──────────────────────────────────────────────

    def focus_prompt(self) -> None:
        self.query_one("#prompt", Input).focus()

    def update_prompt(self, prompt: PromptState) -> None:
        widget = self.query_one("#prompt", Input)
        if widget.value != prompt.text:
            widget.value = prompt.text
            widget.cursor_position = len(prompt.text)
        if prompt.selection is not None:
            widget.selection = Selection(*prompt.selection)

    def update_suggestions(self, state: AutocompleteState) -> None:
        option_list = self.query_one("#suggestions", OptionList)
        if state.results != self._shown_results:
            self._shown_results = list(state.results)
            option_list.clear_options()
            option_list.add_options(
                [Option(suggestion_prompt(item), id=str(i)) for i, item in enumerate(state.results)]
            )
        highlighted = state.cursor_index if state.cursor_index > -1 else None
        if option_list.highlighted != highlighted:
            option_list.highlighted = highlighted
        option_list.set_class(state.is_open and bool(state.results), "open")

    def request_suggestions(self) -> None:
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
        self._refresh_task = asyncio.create_task(self._refresh_suggestions())

    def write_blocks(self, blocks: Sequence[OutputBlock]) -> None:
        log = self.query_one("#log", RichLog)
        for block in blocks:
            log.write(render_block(block, code_action=click_action))

    def scroll_to_end(self) -> None:
        self.query_one("#log", RichLog).scroll_end(animate=False)

    # ── Event routing ────────────────────────────────────────────

    def post_console_event(self, event: ConsoleEvent) -> None:
        """Route an event through the session without blocking the UI.

        Hosts embedding the app post signal events here as well.
        """
        self.run_worker(self.session.handle(event), group="console", exit_on_error=False)

    async def _refresh_suggestions(self) -> None:
        try:
            await self.session.refresh_suggestions()
        except asyncio.CancelledError:
            logger.debug("Suggestion refresh cancelled")
            raise

    async def on_input_changed(self, event: Input.Changed) -> None:
        # Programmatic updates echo back as Changed; the session already has them.
        if event.value == self.session.prompt.text:
            return
        self.post_console_event(PromptEdited(event.value))

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        self.post_console_event(PromptSubmitted(event.value))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        item = self._suggestion_at(event.option_index)
        if item is not None:
            self.post_console_event(SuggestionChosen(item.suggestion))

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        # Only user navigation inside the list previews; update_suggestions sets it too.
        if not event.option_list.has_focus:
            return
        item = self._suggestion_at(event.option_index)
        if item is not None:
            self.post_console_event(SuggestionHighlighted(event.option_index, item.suggestion))

    def on_key(self, event: events.Key) -> None:
        if self.focused is self.query_one("#prompt", Input) or not event.is_printable:
            return
        parts = event.key.split("+")
        modifiers = frozenset(p for p in parts[:-1] if p in MODIFIER_KEYS)
        self.post_console_event(
            PrintableKey(character=event.character or "", prompt_focused=False, modifiers=modifiers)
        )

    def _suggestion_at(self, index: int) -> Suggestion | None:
        results = self.session.autocomplete.results
        if 0 <= index < len(results):
            return results[index]
        return None

    # ── Actions ──────────────────────────────────────────────────

    def action_tab_complete(self) -> None:
        self.post_console_event(TabPressed())

    def action_close_suggestions(self) -> None:
        self.post_console_event(EscapePressed())

    def action_suggestion_up(self) -> None:
        self._move_highlight(-1)

    def action_suggestion_down(self) -> None:
        self._move_highlight(1)

    def _move_highlight(self, step: int) -> None:
        autocomplete = self.session.autocomplete
        results = autocomplete.results
        if not autocomplete.is_open or not results:
            return
        index = step_highlight(autocomplete.cursor_index, step, len(results))
        self.post_console_event(SuggestionHighlighted(index, results[index].suggestion))

    def action_click_code(self, text: str) -> None:
        self.post_console_event(CodeClicked(text))

    def action_clear_log(self) -> None:
        self.query_one("#log", RichLog).clear()


def launch_tui(ctx: ConsoleContext) -> None:
    """Launch the full-screen console."""
    app = TermdeckApp(ctx.get_engine(), config=ctx.get_config())
    app.run()
