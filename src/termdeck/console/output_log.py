"""Append-only output log."""

from __future__ import annotations

from typing import Callable, Sequence

from termdeck.console.prompt import PromptState
from termdeck.console.view import ConsoleView, NullView
from termdeck.models.blocks import EchoBlock, OutputBlock
from termdeck.output.renderer import render, render_error


class OutputLog:
    """Ordered sequence of rendered blocks; never removes or reorders them.

    After each append the view scrolls to the end and the prompt is cleared.
    """

    def __init__(
        self,
        prompt: PromptState,
        view: ConsoleView | None = None,
        renderer: Callable[[str], list[OutputBlock]] = render,
    ) -> None:
        self.prompt = prompt
        self.view = view or NullView()
        self.renderer = renderer
        self._blocks: list[OutputBlock] = []

    @property
    def blocks(self) -> tuple[OutputBlock, ...]:
        return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def append(self, blocks: Sequence[OutputBlock]) -> None:
        new_blocks = list(blocks)
        self._blocks.extend(new_blocks)
        self.view.write_blocks(new_blocks)
        self.view.scroll_to_end()
        self.prompt.clear()

    def append_echo(self, command: str) -> None:
        self.append([EchoBlock(command=command)])

    def append_result(self, raw_text: str) -> list[OutputBlock]:
        """Render engine text and append the blocks."""
        blocks = self.renderer(raw_text)
        self.append(blocks)
        return blocks

    def append_error(self, message: str) -> list[OutputBlock]:
        blocks = render_error(message)
        self.append(blocks)
        return blocks
