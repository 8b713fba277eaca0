"""Suggestion source — adapter over the engine's autocomplete call."""

from __future__ import annotations

import logging

from termdeck.adapters.protocol import CommandEngine
from termdeck.console.brackets import active_word
from termdeck.models.suggestion import Suggestion

logger = logging.getLogger(__name__)


class SuggestionSource:
    """Queries the engine for suggestions, last query wins.

    Each query takes a generation number. A result that comes back after a
    newer query was issued is stale and is returned as None.
    """

    def __init__(self, engine: CommandEngine, max_results: int = 10) -> None:
        self.engine = engine
        self.max_results = max_results
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def query(self, text: str) -> list[Suggestion] | None:
        """Return suggestions for the active word of ``text``.

        Engine failures propagate to the caller.
        """
        self._generation += 1
        generation = self._generation
        query = active_word(text)

        pairs = await self.engine.autocomplete(query)
        if generation != self._generation:
            logger.debug("Discarding stale suggestions for %r", query)
            return None

        results = [Suggestion.from_pair(pair) for pair in pairs]
        return results[: self.max_results] if self.max_results else results
