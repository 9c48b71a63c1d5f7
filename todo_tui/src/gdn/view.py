"""gdn curses-based terminal user interface."""

from __future__ import annotations

import curses
import os
from curses import ascii as curses_ascii
from typing import Optional, Tuple, Union

from . import controller as ctl
from .controller import Controller, Mode

HINTS = "j/down  k/up  o add  d delete  q quit"
OVERLAY_HINTS = "Enter: add   ESC: cancel"
OVERLAY_TITLE = " Add item "

# Smallest screen with a list row, the separator and the status line
MIN_HEIGHT = 3
MIN_WIDTH = 2
OVERLAY_HEIGHT = 4
OVERLAY_MIN_WIDTH = 10
OVERLAY_MAX_WIDTH = 60

# Milliseconds curses waits after ESC for the rest of an escape sequence
ESCAPE_DELAY_MS = "25"

_KEYMAP = {
    curses.KEY_UP: ctl.KEY_UP,
    curses.KEY_DOWN: ctl.KEY_DOWN,
    curses.KEY_ENTER: ctl.KEY_ENTER,
    10: ctl.KEY_ENTER,
    13: ctl.KEY_ENTER,
    27: ctl.KEY_ESCAPE,
    curses.KEY_BACKSPACE: ctl.KEY_BACKSPACE,
    curses_ascii.DEL: ctl.KEY_BACKSPACE,
    curses_ascii.BS: ctl.KEY_BACKSPACE,
}


# PUBLIC_INTERFACE
def translate_key(key: Union[int, str]) -> Optional[str]:
    """
    Map a key from get_wch() to a controller key event, or None if unbound.

    get_wch() returns special keys as int codes and typed characters
    (including control characters such as Enter and ESC) as str.
    """
    if isinstance(key, str):
        if len(key) != 1:
            return None
        code = ord(key)
        if code in _KEYMAP:
            return _KEYMAP[code]
        return key if key.isprintable() else None
    return _KEYMAP.get(key)


def screen_fits(height: int, width: int) -> bool:
    return height >= MIN_HEIGHT and width >= MIN_WIDTH


def overlay_geometry(height: int, width: int) -> Optional[Tuple[int, int, int, int]]:
    """
    Return (rows, cols, top, left) of the centered add-item box, or None
    when the screen is too small to hold it.
    """
    box_w = min(OVERLAY_MAX_WIDTH, width - 4)
    if box_w < OVERLAY_MIN_WIDTH or height < OVERLAY_HEIGHT:
        return None
    top = (height - OVERLAY_HEIGHT) // 2
    left = (width - box_w) // 2
    return OVERLAY_HEIGHT, box_w, top, left


class TodoView:
    """Draws controller state onto a curses screen."""

    def __init__(self, stdscr, controller: Controller):
        self.stdscr = stdscr
        self.controller = controller
        curses.curs_set(0)
        self.stdscr.keypad(True)
        if curses.has_colors():
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass

    def draw(self) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        if not screen_fits(height, width):
            curses.curs_set(0)
            self.stdscr.refresh()
            return

        self._draw_list(height - 2, width)

        self.stdscr.hline(height - 2, 0, curses.ACS_HLINE, width)
        geometry = overlay_geometry(height, width)
        if self.controller.mode is Mode.ADD_ITEM and geometry is None:
            status = f"Add: {self.controller.input_text}"
        else:
            status = self.controller.status or HINTS
        self.stdscr.addnstr(height - 1, 0, status, width - 1)
        self.stdscr.noutrefresh()

        if self.controller.mode is Mode.ADD_ITEM and geometry is not None:
            self._draw_overlay(*geometry)
        else:
            curses.curs_set(0)
        curses.doupdate()

    def _draw_list(self, body_h: int, width: int) -> None:
        lines = self.controller.render_lines()
        cursor = self.controller.cursor
        has_items = bool(self.controller.items)
        scroll = max(0, cursor - body_h + 1)

        for i, line in enumerate(lines[scroll : scroll + body_h]):
            idx = scroll + i
            attrs = curses.A_REVERSE if has_items and idx == cursor else curses.A_NORMAL
            self.stdscr.addnstr(i, 0, line.ljust(width - 1), width - 1, attrs)

    def _draw_overlay(self, box_h: int, box_w: int, top: int, left: int) -> None:
        """Centered modal with the pending title."""
        win = curses.newwin(box_h, box_w, top, left)
        win.erase()
        win.border()
        win.addnstr(0, 2, OVERLAY_TITLE, box_w - 4, curses.A_BOLD)
        win.addnstr(2, 2, OVERLAY_HINTS, box_w - 4, curses.A_DIM)

        field_w = box_w - 4
        text = self.controller.input_text
        visible = text[-(field_w - 1):] if len(text) >= field_w else text
        win.addnstr(1, 2, visible, field_w)
        win.noutrefresh()

        curses.curs_set(1)
        curses.setsyx(top + 1, left + 2 + len(visible))

    def run(self) -> None:
        """Main event loop."""
        while True:
            self.draw()
            event = translate_key(self.stdscr.get_wch())
            if event is None:
                continue
            if not self.controller.handle_key(event):
                break


# PUBLIC_INTERFACE
def start_curses(controller: Controller) -> None:
    """Initialize curses, load items and run the TUI until the user quits."""
    # Read by ncurses at initialization; the built-in default is 1000 ms
    os.environ.setdefault("ESCDELAY", ESCAPE_DELAY_MS)

    def _main(stdscr):
        controller.refresh()
        TodoView(stdscr, controller).run()

    curses.wrapper(_main)
