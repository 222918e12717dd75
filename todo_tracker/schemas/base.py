"""
Base Schemas.

Standard API response envelope.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ErrorInfo(BaseModel):
    """Error detail carried in a failed response."""

    url: str = Field(description="Requested resource URL")
    error: str = Field(description="Human-readable error message")


class ResponseDTO(BaseModel, Generic[DataT]):
    """
    Standard API response envelope.

    Exactly one of `data` and `errors` is populated; the other is null.
    """

    data: DataT | None = None
    errors: ErrorInfo | None = None


# Example usage:
#
# @router.get("/{id}", response_model=ResponseDTO[TodoDTO])
# async def get_note(id: str):
#     ...
#     return ResponseDTO(data=to_dto(todo))
