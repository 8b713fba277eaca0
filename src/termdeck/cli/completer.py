"""prompt_toolkit completer that asks the command engine for suggestions."""

from __future__ import annotations

from typing import AsyncGenerator, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from termdeck.console.autocomplete import AutocompleteController


class EngineCompleter(Completer):
    """Completes the whole line with the engine's suggestions and descriptions.

    Suggestions are full commands, so each completion replaces everything
    before the cursor.
    """

    def __init__(self, autocomplete: AutocompleteController) -> None:
        self.autocomplete = autocomplete

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        # Suggestions come from an async engine; see get_completions_async.
        return []

    async def get_completions_async(
        self, document: Document, complete_event: CompleteEvent
    ) -> AsyncGenerator[Completion, None]:
        text = document.text_before_cursor
        if not text.strip():
            return

        for item in await self.autocomplete.refresh(text):
            yield Completion(
                item.suggestion,
                start_position=-len(text),
                display_meta=item.description,
            )
