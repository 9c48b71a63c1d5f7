from __future__ import annotations

import enum
import logging
from typing import List, Optional

from .errors import StorageError
from .models import TodoEntity
from .repositories import Repository
from .schemas import TodoCreate

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "Nothing to do!"

# Key events understood by the controller
KEY_UP = "up"
KEY_DOWN = "down"
KEY_OPEN = "open"
KEY_DELETE = "delete"
KEY_QUIT = "quit"
KEY_ENTER = "enter"
KEY_ESCAPE = "escape"
KEY_BACKSPACE = "backspace"

# Command keys in the list view; in the add-item overlay these letters are text
LIST_BINDINGS = {
    "j": KEY_DOWN,
    "k": KEY_UP,
    "o": KEY_OPEN,
    "d": KEY_DELETE,
    "q": KEY_QUIT,
}


class Mode(enum.Enum):
    LIST = "list"
    ADD_ITEM = "add_item"


# PUBLIC_INTERFACE
class Controller:
    """
    Interaction state for the to-do list view and the add-item overlay.

    The controller never renders; it holds the items last fetched from the
    repository, the cursor, the overlay input buffer and a status message,
    and moves between states in response to key events. handle_key()
    returns False once the user asks to quit.
    """

    def __init__(self, repo: Repository) -> None:
        self.repo = repo
        self.items: List[TodoEntity] = []
        self.cursor = 0
        self.mode = Mode.LIST
        self.input_text = ""
        self.status: Optional[str] = None

    # -- storage-backed transitions --------------------------------------

    def refresh(self) -> bool:
        """
        Re-read all items. On failure the previous items are kept.
        """
        try:
            items = self.repo.list()
        except StorageError as e:
            logger.warning("Failed to load todos: %s", e)
            self.status = f"Could not load items: {e}"
            return False
        self.items = items
        return True

    def selected(self) -> Optional[TodoEntity]:
        if 0 <= self.cursor < len(self.items):
            return self.items[self.cursor]
        return None

    def move_down(self) -> None:
        self.cursor = max(0, min(self.cursor + 1, len(self.items) - 1))

    def move_up(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def open_add_item(self) -> None:
        self.input_text = ""
        self.mode = Mode.ADD_ITEM

    def _close_overlay(self) -> None:
        self.input_text = ""
        self.mode = Mode.LIST

    def dismiss_add_item(self) -> None:
        """Leave the overlay without creating an item and re-read the list."""
        self._close_overlay()
        self.refresh()

    def confirm_add_item(self) -> Optional[int]:
        """
        Create an item titled with the input buffer, verbatim, and return to
        the list. Return the new id, or None if the write failed.
        """
        title = self.input_text
        self._close_overlay()
        new_id: Optional[int] = None
        try:
            new_id = self.repo.create(TodoCreate(title=title))
        except StorageError as e:
            logger.warning("Failed to create todo: %s", e)
            self.status = f"Could not add item: {e}"
        self.refresh()
        return new_id

    def delete_selected(self) -> Optional[int]:
        """
        Delete the item under the cursor and re-clamp the cursor.
        Return the deleted id, or None if nothing was deleted.
        """
        item = self.selected()
        if item is None:
            return None
        todo_id = item["id"]
        try:
            self.repo.delete(todo_id)
        except StorageError as e:
            logger.warning("Failed to delete todo %d: %s", todo_id, e)
            self.status = f"Could not delete item: {e}"
            return None
        self.refresh()
        if self.cursor >= len(self.items):
            self.cursor = max(0, self.cursor - 1)
        return todo_id

    # -- input ----------------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Apply one key event. Return False when the application should exit."""
        if self.mode is Mode.ADD_ITEM:
            self._handle_overlay_key(key)
            return True

        key = LIST_BINDINGS.get(key, key)
        if key == KEY_QUIT:
            return False
        # Any command clears a stale status message
        self.status = None
        if key == KEY_DOWN:
            self.move_down()
        elif key == KEY_UP:
            self.move_up()
        elif key == KEY_OPEN:
            self.open_add_item()
        elif key == KEY_DELETE:
            self.delete_selected()
        return True

    def _handle_overlay_key(self, key: str) -> None:
        if key == KEY_ENTER:
            self.confirm_add_item()
        elif key == KEY_ESCAPE:
            self.dismiss_add_item()
        elif key == KEY_BACKSPACE:
            self.input_text = self.input_text[:-1]
        elif len(key) == 1 and key.isprintable():
            self.input_text += key

    # -- rendering contract ---------------------------------------------------

    def render_lines(self) -> List[str]:
        """Return the list body, one line per item."""
        if not self.items:
            return [EMPTY_MESSAGE]
        return [" ".join(t["title"].splitlines()) for t in self.items]
