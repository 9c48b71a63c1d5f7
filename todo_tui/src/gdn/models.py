from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A persisted to-do item as returned by the storage backends.

    Fields:
    - id: Unique integer identifier, assigned on creation and never reused
    - title: Free-form text, stored verbatim (may be empty)
    """

    id: int
    title: str
