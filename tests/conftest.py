"""Shared fixtures: isolated config directory, fake engines, recording views."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Sequence
from unittest.mock import AsyncMock

import pytest

from termdeck.console.view import NullView
from termdeck.models.blocks import OutputBlock
from termdeck.models.state import AutocompleteState


@pytest.fixture(autouse=True)
def config_dir(monkeypatch):
    """Point TERMDECK_CONFIG_DIR at a throwaway directory for every test."""
    with tempfile.TemporaryDirectory() as d:
        monkeypatch.setenv("TERMDECK_CONFIG_DIR", d)
        yield Path(d)

    # setup_logging() detaches the termdeck logger from the root logger
    logger = logging.getLogger("termdeck")
    for handler in list(logger.handlers):
        if getattr(handler, "_termdeck", False):
            logger.removeHandler(handler)
            handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class FakeEngine:
    """A command engine whose calls are AsyncMocks."""

    def __init__(
        self,
        welcome: str = "",
        suggestions: Sequence[tuple[str, str]] = (),
        result: str = "done",
    ) -> None:
        self.initialize = AsyncMock(return_value=welcome)
        self.autocomplete = AsyncMock(return_value=list(suggestions))
        self.command = AsyncMock(return_value=result)


class RecordingView(NullView):
    """Records every call a console session makes on its view."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.written: list[OutputBlock] = []
        self.states: list[dict[str, Any]] = []

    def focus_prompt(self) -> None:
        self.calls.append("focus_prompt")

    def update_prompt(self, prompt) -> None:
        self.calls.append("update_prompt")

    def update_suggestions(self, state: AutocompleteState) -> None:
        self.calls.append("update_suggestions")
        self.states.append(state.model_dump())

    def request_suggestions(self) -> None:
        self.calls.append("request_suggestions")

    def write_blocks(self, blocks: Sequence[OutputBlock]) -> None:
        self.calls.append("write_blocks")
        self.written.extend(blocks)

    def scroll_to_end(self) -> None:
        self.calls.append("scroll_to_end")


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def make_engine():
    """Factory for engines with a custom welcome text, suggestions or result."""
    return FakeEngine
