"""Base engine — convenience ABC implementing the protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class BaseEngine(ABC):
    """Abstract base class for engines. Provides default implementations."""

    @abstractmethod
    def metadata(self) -> dict[str, str]:
        ...

    async def initialize(self) -> str:
        """Override to prepare the engine; the default has no welcome text."""
        return ""

    @abstractmethod
    async def autocomplete(self, query: str) -> Sequence[tuple[str, str]]:
        ...

    @abstractmethod
    async def command(self, text: str) -> str:
        ...
