"""Autocomplete controller — suggestion list state and placeholder resolution."""

from __future__ import annotations

import logging
from typing import Sequence

from termdeck.console.brackets import fill_placeholder, locate
from termdeck.console.prompt import PromptState
from termdeck.console.suggestions import SuggestionSource
from termdeck.console.view import ConsoleView, NullView
from termdeck.models.state import AutocompleteState
from termdeck.models.suggestion import Suggestion

logger = logging.getLogger(__name__)


class AutocompleteController:
    """Owns the suggestion list (open flag, cursor, results).

    State is changed only through the methods below; every change is pushed
    to the view.
    """

    def __init__(
        self,
        prompt: PromptState,
        source: SuggestionSource,
        view: ConsoleView | None = None,
    ) -> None:
        self.prompt = prompt
        self.source = source
        self.view = view or NullView()
        self.state = AutocompleteState()

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def cursor_index(self) -> int:
        return self.state.cursor_index

    @property
    def results(self) -> list[Suggestion]:
        return list(self.state.results)

    # ── State transitions ────────────────────────────────────────

    def on_query_result(self, results: Sequence[Suggestion]) -> None:
        """Replace the results; the open flag is left alone."""
        self.state.results = list(results)
        if self.state.cursor_index >= len(self.state.results):
            self.state.cursor_index = -1
        self.view.update_suggestions(self.state)

    def open(self, query: bool = True) -> None:
        """Open the list; with ``query`` the view starts a fresh query cycle."""
        self.state.is_open = True
        self.view.update_suggestions(self.state)
        if query:
            self.view.request_suggestions()

    def close(self) -> None:
        self.state.results = []
        self.state.cursor_index = -1
        self.state.is_open = False
        self.view.update_suggestions(self.state)

    def move_cursor(self, index: int) -> None:
        """Highlight ``results[index]``; -1 clears the highlight."""
        index = max(-1, min(index, len(self.state.results) - 1))
        if index == self.state.cursor_index:
            return
        self.state.cursor_index = index
        self.view.update_suggestions(self.state)

    # ── Resolution ───────────────────────────────────────────────

    def select_expression(self, command: str) -> bool:
        """Put ``command`` in the prompt and select its first placeholder.

        Returns False when there is no ``[...]`` to select.
        """
        expression = locate(command)
        if expression is None:
            self.prompt.set_text(command)
            return False

        self.prompt.set_text_with_selection(command, expression.start, expression.end)
        if not self.state.is_open:
            self.open()
        return True

    def on_tab(self) -> bool:
        """Take the highlighted suggestion (or the only one) and keep resolving."""
        state = self.state
        if not state.is_open:
            return False
        if not (len(state.results) == 1 or state.cursor_index > -1):
            return False

        choice = state.results[max(state.cursor_index, 0)]
        self.select_expression(self.resolve(choice.suggestion))
        self.open()
        return True

    def resolve(self, suggestion: str) -> str:
        """Return the prompt text a suggestion stands for.

        Full commands start with the text before the selected placeholder and
        replace the prompt. Anything else fills the placeholder.
        """
        if self.prompt.selection is None:
            return suggestion
        start, end = self.prompt.selection
        text = self.prompt.text
        if suggestion.startswith(text[:start]):
            return suggestion
        return fill_placeholder(text, start, end, suggestion)

    # ── Queries ──────────────────────────────────────────────────

    async def refresh(self, text: str | None = None) -> list[Suggestion]:
        """Query suggestions for ``text`` (default: the prompt) and apply them.

        A failed query counts as no suggestions. A stale one changes nothing.
        """
        if text is None:
            text = self.prompt.text
        issued = self.source.generation + 1
        try:
            results = await self.source.query(text)
        except Exception:
            logger.warning("Autocomplete failed for %r", text, exc_info=True)
            results = [] if self.source.generation == issued else None

        if results is None:
            return self.results
        self.on_query_result(results)
        return results
