"""
Todo Schemas.

Pydantic schemas for todo API request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field


class CreateNoteRequest(BaseModel):
    """Schema for creating a new note."""

    note: str = Field(
        ...,
        min_length=1,
        description="Note text",
        examples=["buy milk"],
    )


class UpdateNoteRequest(BaseModel):
    """Schema for replacing the text of an existing note."""

    id: str = Field(..., min_length=1, description="Note identifier")
    note: str = Field(
        ...,
        min_length=1,
        description="New note text",
        examples=["buy oat milk"],
    )


class TodoDTO(BaseModel):
    """Schema for a todo in API responses."""

    id: str = Field(description="Note unique identifier")
    note: str = Field(description="Note text")
    is_done: bool = Field(alias="isDone", description="Whether the note is done")

    model_config = ConfigDict(populate_by_name=True)
