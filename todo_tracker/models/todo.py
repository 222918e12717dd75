"""
Todo Record.

Store-facing shape of a todo note.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from todo_tracker.models.base import Base, UUIDMixin


class TodoRecord(UUIDMixin, Base):
    """Persisted todo note. `id` stays None until the first save."""

    __tablename__ = "todo"

    note: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    is_done: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<TodoRecord(id={self.id}, is_done={self.is_done})>"
