"""
gdn: a terminal to-do list manager.

Items are stored in a local SQLite database and shown in a curses list
view. Run the `gdn` console script, or `python -m src.gdn.main`.
"""

__version__ = "0.1.0"
