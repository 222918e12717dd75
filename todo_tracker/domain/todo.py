"""
Todo Domain Entity.

In-process shape of a todo note. Constructed only from a persisted
record, so `id` is always present.
"""

from dataclasses import dataclass


@dataclass
class Todo:
    """A todo note with its completion flag."""

    id: str
    note: str
    is_done: bool = False

    def mark_done(self) -> "Todo":
        """Flag the note as done. There is no way back to not-done."""
        self.is_done = True
        return self

    def update_note(self, new_note: str) -> "Todo":
        """Replace the note text, leaving the done flag untouched."""
        self.note = new_note
        return self
