"""Built-in demo engine — dice and notes, so the console runs out of the box."""

from __future__ import annotations

import json
import random
import re
from typing import Sequence

from termdeck import __version__
from termdeck.adapters.base import BaseEngine
from termdeck.core.exceptions import EngineError

# Command templates; [...] marks a placeholder the user resolves via Tab.
COMMANDS = {
    "about": "About this console",
    "forget [note]": "Delete a saved note",
    "help": "List available commands",
    "note [text]": "Save a note",
    "notes": "List saved notes",
    "roll [dice]": "Roll dice, e.g. roll 2d6+1",
}

COMMON_ROLLS = ["d4", "d6", "d8", "d10", "d12", "d20", "2d6", "4d6", "d100"]

MAX_SUGGESTIONS = 10

_DICE_RE = re.compile(r"^(\d*)d(\d+)([+-]\d+)?$", re.IGNORECASE)


class DemoEngine(BaseEngine):
    """In-memory engine used when no other engine is configured."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.notes: list[str] = []

    def metadata(self) -> dict[str, str]:
        return {
            "name": "demo",
            "version": __version__,
            "description": "Dice rolls and notes for trying out the console",
            "author": "termdeck",
        }

    async def initialize(self) -> str:
        return (
            "# termdeck\n\n"
            "Type `help` to see what this engine can do. Press **Tab** to fill in "
            "a `[placeholder]` from the suggestion list."
        )

    async def autocomplete(self, query: str) -> Sequence[tuple[str, str]]:
        query = query.lstrip().lower()
        if not query:
            return []

        suggestions: list[tuple[str, str]] = []
        keyword, sep, rest = query.partition(" ")

        if sep and keyword == "roll":
            suggestions = [(f"roll {r}", f"Roll {r}") for r in COMMON_ROLLS if r.startswith(rest.strip())]
        elif sep and keyword == "forget":
            suggestions = [
                (f"forget {note}", "Delete this note")
                for note in self.notes
                if note.lower().startswith(rest.strip())
            ]
        else:
            suggestions = [(cmd, desc) for cmd, desc in COMMANDS.items() if cmd.startswith(query)]

        suggestions.sort(key=lambda pair: pair[0])
        return suggestions[:MAX_SUGGESTIONS]

    async def command(self, text: str) -> str:
        keyword, _, rest = text.strip().partition(" ")
        keyword = keyword.lower()
        rest = rest.strip()

        if keyword == "help" and not rest:
            return self._help()
        if keyword == "about" and not rest:
            return f"termdeck demo engine **{__version__}**. Try ~roll d20~ or ~notes~."
        if keyword == "roll" and rest:
            return self._roll(rest)
        if keyword == "note" and rest:
            self.notes.append(rest)
            return f"Saved note {len(self.notes)}. Use ~notes~ to list your notes."
        if keyword == "notes" and not rest:
            return self._list_notes()
        if keyword == "forget" and rest:
            return self._forget(rest)
        return f'! Unknown command: "{text}"'

    # ── Persistence ──────────────────────────────────────────────

    async def export_state(self, name: str) -> bytes:
        payload = {"name": name, "version": __version__, "notes": self.notes}
        return json.dumps(payload, indent=2).encode("utf-8")

    async def import_state(self, payload: bytes) -> str:
        try:
            data = json.loads(payload.decode("utf-8"))
            notes = [str(n) for n in data["notes"]]
        except (ValueError, KeyError, TypeError) as e:
            raise EngineError(f"Not a termdeck notes export: {e}") from e
        self.notes.extend(n for n in notes if n not in self.notes)
        return f"Imported {len(notes)} notes. Use ~notes~ to list them."

    # ── Commands ─────────────────────────────────────────────────

    def _help(self) -> str:
        lines = ["# Commands", ""]
        for cmd, desc in COMMANDS.items():
            lines.append(f"* `{cmd}` — {desc}")
        return "\n".join(lines)

    def _roll(self, expression: str) -> str:
        match = _DICE_RE.match(expression.replace(" ", ""))
        if match is None:
            return f"! Invalid dice expression: {expression}"
        count = int(match.group(1) or 1)
        sides = int(match.group(2))
        modifier = int(match.group(3) or 0)
        if not 1 <= count <= 100 or not 2 <= sides <= 1000:
            return f"! Dice out of range: {expression}"

        rolls = [self.rng.randint(1, sides) for _ in range(count)]
        total = sum(rolls) + modifier
        detail = " + ".join(str(r) for r in rolls)
        if modifier:
            detail += f" {'+' if modifier > 0 else '-'} {abs(modifier)}"
        return f"**{expression}**: {detail} = **{total}**"

    def _list_notes(self) -> str:
        if not self.notes:
            return "# Notes\n\n*You have no notes yet.* Use `note [text]` to add one."
        lines = ["# Notes", ""]
        for i, note in enumerate(self.notes, start=1):
            lines.append(f"{i}. {note}")
        return "\n".join(lines)

    def _forget(self, target: str) -> str:
        if target.isdigit() and 1 <= int(target) <= len(self.notes):
            removed = self.notes.pop(int(target) - 1)
        elif target in self.notes:
            self.notes.remove(target)
            removed = target
        else:
            return f'! No note matches "{target}".'
        return f"Forgot *{removed}*."
