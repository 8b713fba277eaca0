"""Command dispatcher — the single entry point for submissions."""

from __future__ import annotations

import asyncio
import logging

from termdeck.adapters.protocol import CommandEngine
from termdeck.console.autocomplete import AutocompleteController
from termdeck.console.output_log import OutputLog
from termdeck.core.exceptions import RenderError

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Redirects placeholder submissions to suggestion selection, runs the rest.

    Submissions are serialized: each holds the lock from the placeholder check
    until its result is appended, so a redirect never lands under an earlier
    result and results appear in submission order.
    """

    def __init__(
        self,
        engine: CommandEngine,
        autocomplete: AutocompleteController,
        output: OutputLog,
    ) -> None:
        self.engine = engine
        self.autocomplete = autocomplete
        self.output = output
        self.lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self.lock.locked()

    async def submit(self, raw_text: str) -> bool:
        """Submit ``raw_text``; returns True if the engine ran it successfully."""
        if not raw_text or raw_text.isspace():
            return False

        async with self.lock:
            if self.autocomplete.select_expression(raw_text):
                logger.debug("Redirected %r to placeholder selection", raw_text)
                return False

            self.autocomplete.close()
            try:
                result = await self.engine.command(raw_text)
            except Exception as e:
                logger.exception("Command failed: %r", raw_text)
                self.output.append_echo(raw_text)
                self.output.append_error(f"Command failed: {e}")
                return False

            self.output.append_echo(raw_text)
            try:
                self.output.append_result(str(result))
            except RenderError as e:
                logger.exception("Could not render the result of %r", raw_text)
                self.output.append_error(str(e))
                return False
            return True
