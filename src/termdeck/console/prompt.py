"""Prompt text and selection state."""

from __future__ import annotations

from typing import Callable


class PromptState:
    """The single-line prompt: raw text plus an optional ``[start, end)`` selection."""

    def __init__(
        self,
        on_change: Callable[["PromptState"], None] | None = None,
        on_focus: Callable[[], None] | None = None,
    ) -> None:
        self.text = ""
        self.selection: tuple[int, int] | None = None
        self._on_change = on_change
        self._on_focus = on_focus

    @property
    def selected_text(self) -> str:
        if self.selection is None:
            return ""
        start, end = self.selection
        return self.text[start:end]

    def set_text(self, new_text: str) -> None:
        """Replace the text and drop any selection."""
        self.text = new_text or ""
        self.selection = None
        self._changed()

    def sync(self, typed_text: str) -> None:
        """Record text the user typed; the widget already shows it, so no change is pushed."""
        self.text = typed_text or ""
        self.selection = None

    def set_text_with_selection(self, new_text: str, start: int, end: int) -> None:
        """Replace the text and select ``[start, end)``; focuses the prompt."""
        new_text = new_text or ""
        if not 0 <= start <= end <= len(new_text):
            raise ValueError(f"Selection {start}..{end} is outside text of length {len(new_text)}")
        self.text = new_text
        self.selection = (start, end)
        self._changed()
        if self._on_focus is not None:
            self._on_focus()

    def clear(self) -> None:
        """Empty the prompt after a dispatch."""
        self.text = ""
        self.selection = None
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
