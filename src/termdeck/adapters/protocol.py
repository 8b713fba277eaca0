"""Engine protocol — the contract every command engine must follow."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class CommandEngine(Protocol):
    """Protocol that all termdeck command engines must implement."""

    async def initialize(self) -> str:
        """Prepare the engine and return welcome text (markdown)."""
        ...

    async def autocomplete(self, query: str) -> Sequence[tuple[str, str]]:
        """Return ordered ``(suggestion, description)`` pairs for ``query``."""
        ...

    async def command(self, text: str) -> str:
        """Run ``text`` and return result text (markdown, ``! `` for errors)."""
        ...


@runtime_checkable
class PersistentEngine(CommandEngine, Protocol):
    """An engine whose state can be exported and imported."""

    async def export_state(self, name: str) -> bytes:
        """Serialize the engine's persisted state."""
        ...

    async def import_state(self, payload: bytes) -> str:
        """Load state produced by ``export_state``; returns a message to show."""
        ...
