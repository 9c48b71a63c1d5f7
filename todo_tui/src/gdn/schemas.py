from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Input for creating a new to-do item.

    The title is kept exactly as typed: no trimming and no length limits.
    An empty title is valid.
    """

    model_config = ConfigDict(strict=True)

    title: str = Field(..., description="Title of the to-do item, stored verbatim")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    A to-do item read back from storage.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique identifier of the to-do item")
    title: str = Field(default="", description="Title of the to-do item")

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: Optional[object]) -> str:
        """
        The title column is nullable and untyped; rows written by other tools
        may hold NULL or a non-text value.
        """
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)
