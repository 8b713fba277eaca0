"""Keyboard router — maps input events onto controller operations."""

from __future__ import annotations

import logging

from termdeck.console.autocomplete import AutocompleteController
from termdeck.console.dispatcher import CommandDispatcher
from termdeck.console.events import (
    CodeClicked,
    ConsoleEvent,
    EscapePressed,
    ExportRequested,
    ImportRequested,
    PrintableKey,
    PromptEdited,
    PromptSubmitted,
    SubmitCommand,
    SuggestionChosen,
    SuggestionHighlighted,
    TabPressed,
)
from termdeck.console.prompt import PromptState
from termdeck.console.signals import HostSignalHandler
from termdeck.console.view import ConsoleView

logger = logging.getLogger(__name__)


class KeyboardRouter:
    """Single dispatcher for every input source of one console session."""

    def __init__(
        self,
        prompt: PromptState,
        autocomplete: AutocompleteController,
        dispatcher: CommandDispatcher,
        signals: HostSignalHandler,
        view: ConsoleView,
    ) -> None:
        self.prompt = prompt
        self.autocomplete = autocomplete
        self.dispatcher = dispatcher
        self.signals = signals
        self.view = view

    async def route(self, event: ConsoleEvent) -> bool:
        """Handle one event; returns False when it was ignored."""
        if isinstance(event, TabPressed):
            if self.autocomplete.on_tab():
                return True
            # Nothing to take yet: show what the engine suggests instead.
            if self.prompt.text:
                self.autocomplete.open()
                return True
            return False

        if isinstance(event, EscapePressed):
            if not self.autocomplete.is_open:
                return False
            self.autocomplete.close()
            return True

        if isinstance(event, PrintableKey):
            if event.prompt_focused or event.modifiers:
                return False
            self.view.focus_prompt()
            return True

        if isinstance(event, PromptEdited):
            return await self._edited(event.text)

        if isinstance(event, (PromptSubmitted, CodeClicked)):
            return await self.dispatcher.submit(event.text)

        if isinstance(event, SuggestionChosen):
            self.autocomplete.select_expression(self.autocomplete.resolve(event.text))
            return True

        if isinstance(event, SuggestionHighlighted):
            if event.index == self.autocomplete.cursor_index:
                return False
            self.autocomplete.move_cursor(event.index)
            self.autocomplete.select_expression(self.autocomplete.resolve(event.text))
            return True

        if isinstance(event, SubmitCommand):
            logger.info("Host submitted %r", event.command)
            return await self.dispatcher.submit(event.command)

        if isinstance(event, ExportRequested):
            return await self.signals.export(event.name) is not None

        if isinstance(event, ImportRequested):
            return await self.signals.import_(event.path)

        logger.warning("Ignoring unknown console event %r", event)
        return False

    async def _edited(self, text: str) -> bool:
        if text == self.prompt.text:
            return False
        self.prompt.sync(text)
        if not text:
            self.autocomplete.close()
            return True

        results = await self.autocomplete.refresh(text)
        if self.prompt.text != text:
            # Submitted or edited again while the engine was answering.
            return True
        if results and not self.autocomplete.is_open:
            self.autocomplete.open(query=False)
        return True
