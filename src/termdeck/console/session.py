"""Console session — wires the loop's components for one front end."""

from __future__ import annotations

import logging

from termdeck.adapters.protocol import CommandEngine
from termdeck.console.autocomplete import AutocompleteController
from termdeck.console.dispatcher import CommandDispatcher
from termdeck.console.events import ConsoleEvent
from termdeck.console.keyboard import KeyboardRouter
from termdeck.console.output_log import OutputLog
from termdeck.console.prompt import PromptState
from termdeck.console.signals import HostSignalHandler
from termdeck.console.suggestions import SuggestionSource
from termdeck.console.view import ConsoleView, NullView
from termdeck.models.suggestion import Suggestion

logger = logging.getLogger(__name__)


class ConsoleSession:
    """One prompt, one suggestion list, one output log, one engine."""

    def __init__(
        self,
        engine: CommandEngine,
        view: ConsoleView | None = None,
        max_suggestions: int = 10,
    ) -> None:
        self.engine = engine
        self.view = view or NullView()
        self.prompt = PromptState(on_change=self.view.update_prompt, on_focus=self.view.focus_prompt)
        self.suggestions = SuggestionSource(engine, max_results=max_suggestions)
        self.autocomplete = AutocompleteController(self.prompt, self.suggestions, self.view)
        self.output = OutputLog(self.prompt, self.view)
        self.dispatcher = CommandDispatcher(engine, self.autocomplete, self.output)
        self.signals = HostSignalHandler(engine, self.output, self.dispatcher.lock)
        self.router = KeyboardRouter(
            self.prompt, self.autocomplete, self.dispatcher, self.signals, self.view
        )
        self.started = False

    async def start(self, show_welcome: bool = True) -> bool:
        """Initialize the engine and append its welcome text.

        A failed initialization is logged and shown as an error block.
        """
        try:
            welcome = await self.engine.initialize()
        except Exception as e:
            logger.exception("Engine failed to initialize")
            self.output.append_error(f"Failed to start the command engine: {e}")
            return False

        self.started = True
        if show_welcome and welcome:
            self.output.append_result(str(welcome))
        return True

    async def handle(self, event: ConsoleEvent) -> bool:
        return await self.router.route(event)

    async def submit(self, text: str) -> bool:
        return await self.dispatcher.submit(text)

    async def refresh_suggestions(self) -> list[Suggestion]:
        return await self.autocomplete.refresh(self.prompt.text)
