"""The surface a console session drives: prompt widget, suggestion list, log."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

from termdeck.models.blocks import OutputBlock
from termdeck.models.state import AutocompleteState

if TYPE_CHECKING:
    from termdeck.console.prompt import PromptState


@runtime_checkable
class ConsoleView(Protocol):
    """Protocol that front ends implement to display a console session."""

    def focus_prompt(self) -> None:
        """Give input focus to the prompt."""
        ...

    def update_prompt(self, prompt: PromptState) -> None:
        """Show the prompt's text and selection."""
        ...

    def update_suggestions(self, state: AutocompleteState) -> None:
        """Show or hide the suggestion list."""
        ...

    def request_suggestions(self) -> None:
        """Start a fresh suggestion query for the current prompt text."""
        ...

    def write_blocks(self, blocks: Sequence[OutputBlock]) -> None:
        """Display newly appended output blocks."""
        ...

    def scroll_to_end(self) -> None:
        """Scroll the output log to its last block."""
        ...


class NullView:
    """A view that displays nothing; used headless and as a base class."""

    def focus_prompt(self) -> None:
        pass

    def update_prompt(self, prompt: PromptState) -> None:
        pass

    def update_suggestions(self, state: AutocompleteState) -> None:
        pass

    def request_suggestions(self) -> None:
        pass

    def write_blocks(self, blocks: Sequence[OutputBlock]) -> None:
        pass

    def scroll_to_end(self) -> None:
        pass
