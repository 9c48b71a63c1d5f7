import pytest

from src.gdn.controller import EMPTY_MESSAGE, Controller, Mode
from src.gdn.db import SQLiteRepository
from src.gdn.errors import StorageError
from src.gdn.repositories import InMemoryRepository
from src.gdn.schemas import TodoCreate


class FlakyRepository(InMemoryRepository):
    """In-memory repository whose operations can be made to fail."""

    def __init__(self):
        super().__init__()
        self.fail_list = False
        self.fail_create = False
        self.fail_delete = False

    def list(self):
        if self.fail_list:
            raise StorageError("disk I/O error")
        return super().list()

    def create(self, data):
        if self.fail_create:
            raise StorageError("database or disk is full")
        return super().create(data)

    def delete(self, todo_id):
        if self.fail_delete:
            raise StorageError("attempt to write a readonly database")
        return super().delete(todo_id)


def make_controller(*titles, repo=None):
    repo = repo if repo is not None else InMemoryRepository()
    for title in titles:
        repo.create(TodoCreate(title=title))
    c = Controller(repo)
    c.refresh()
    return c


def type_text(c, text):
    for ch in text:
        assert c.handle_key(ch) is True


class TestRendering:
    def test_empty_list_renders_nothing_to_do(self):
        c = make_controller()
        assert c.render_lines() == [EMPTY_MESSAGE]
        assert c.selected() is None

    def test_items_render_one_line_each(self):
        c = make_controller("Buy milk", "Walk dog")
        assert c.render_lines() == ["Buy milk", "Walk dog"]

    def test_multiline_title_renders_on_one_line(self):
        c = make_controller("first\nsecond")
        assert c.render_lines() == ["first second"]


class TestCursor:
    def test_down_and_up(self):
        c = make_controller("a", "b", "c")
        c.handle_key("down")
        assert c.cursor == 1
        c.handle_key("j")
        assert c.cursor == 2
        c.handle_key("up")
        assert c.cursor == 1
        c.handle_key("k")
        assert c.cursor == 0

    def test_up_clamps_at_zero(self):
        c = make_controller("a", "b")
        for _ in range(5):
            c.handle_key("up")
        assert c.cursor == 0

    def test_down_clamps_at_last_item(self):
        # The cursor never rests past the last item
        c = make_controller("a", "b")
        for _ in range(5):
            c.handle_key("down")
        assert c.cursor == 1
        assert c.selected()["title"] == "b"

    def test_down_on_empty_list_stays_at_zero(self):
        c = make_controller()
        c.handle_key("down")
        assert c.cursor == 0

    @pytest.mark.parametrize("moves", ["dduuud", "uuuu", "dddddddddd", "dudududu", "ddduddd"])
    def test_cursor_stays_in_bounds(self, moves):
        c = make_controller("a", "b", "c", "d")
        for m in moves:
            c.handle_key("down" if m == "d" else "up")
            assert 0 <= c.cursor <= len(c.items) - 1


class TestAddItemOverlay:
    def test_open_enters_overlay_with_empty_input(self):
        c = make_controller()
        c.input_text = "stale"
        c.handle_key("o")
        assert c.mode is Mode.ADD_ITEM
        assert c.input_text == ""

    def test_confirm_creates_item_and_refreshes(self):
        c = make_controller()
        c.handle_key("open")
        type_text(c, "Buy milk")
        c.handle_key("enter")

        assert c.mode is Mode.LIST
        assert c.items == [{"id": 1, "title": "Buy milk"}]
        assert c.input_text == ""

    def test_command_letters_are_text_in_overlay(self):
        c = make_controller()
        c.handle_key("o")
        type_text(c, "do jkq")
        assert c.mode is Mode.ADD_ITEM
        c.handle_key("enter")
        assert c.render_lines() == ["do jkq"]

    def test_title_is_kept_verbatim(self):
        c = make_controller()
        c.handle_key("o")
        type_text(c, "  spaced  ")
        c.handle_key("enter")
        assert c.items[0]["title"] == "  spaced  "

    def test_empty_title_is_created(self):
        c = make_controller()
        c.handle_key("o")
        c.handle_key("enter")
        assert c.items == [{"id": 1, "title": ""}]

    def test_backspace_edits_input(self):
        c = make_controller()
        c.handle_key("o")
        type_text(c, "cat")
        c.handle_key("backspace")
        c.handle_key("backspace")
        type_text(c, "ow")
        assert c.input_text == "cow"
        c.handle_key("backspace")
        c.handle_key("backspace")
        c.handle_key("backspace")
        c.handle_key("backspace")
        assert c.input_text == ""

    def test_escape_dismisses_without_creating(self):
        c = make_controller("existing")
        c.handle_key("o")
        type_text(c, "never saved")
        c.handle_key("escape")

        assert c.mode is Mode.LIST
        assert c.input_text == ""
        assert c.render_lines() == ["existing"]

    def test_non_printable_keys_are_ignored(self):
        c = make_controller()
        c.handle_key("o")
        c.handle_key("up")
        c.handle_key("\x01")
        assert c.input_text == ""
        assert c.mode is Mode.ADD_ITEM

    def test_escape_rereads_list(self, tmp_path):
        db_path = str(tmp_path / "db.sqlite")
        with SQLiteRepository(db_path) as repo, SQLiteRepository(db_path) as other:
            c = Controller(repo)
            c.refresh()
            c.handle_key("o")
            other.create(TodoCreate(title="written elsewhere"))

            c.handle_key("escape")

            assert c.mode is Mode.LIST
            assert c.render_lines() == ["written elsewhere"]

    def test_escape_with_failing_storage_keeps_items(self):
        repo = FlakyRepository()
        c = make_controller("a", repo=repo)
        c.handle_key("o")
        repo.fail_list = True
        c.handle_key("escape")

        assert c.mode is Mode.LIST
        assert c.render_lines() == ["a"]
        assert "Could not load items" in c.status


class TestDelete:
    def test_delete_last_row_moves_cursor_up(self):
        c = make_controller("a", "b")
        c.handle_key("down")
        assert c.cursor == 1

        c.handle_key("d")

        assert c.render_lines() == ["a"]
        assert c.cursor == 0

    def test_delete_middle_row_keeps_cursor(self):
        c = make_controller("a", "b", "c")
        c.handle_key("down")
        c.handle_key("delete")
        assert c.render_lines() == ["a", "c"]
        assert c.cursor == 1

    def test_delete_only_item_leaves_empty_list(self):
        c = make_controller("only")
        c.handle_key("d")
        assert c.render_lines() == [EMPTY_MESSAGE]
        assert c.cursor == 0

    def test_delete_on_empty_list_is_noop(self):
        c = make_controller()
        assert c.delete_selected() is None
        assert c.handle_key("d") is True
        assert c.items == []

    def test_delete_returns_deleted_id(self):
        c = make_controller("a", "b")
        c.handle_key("down")
        assert c.delete_selected() == 2


class TestStorageFailures:
    def test_failed_refresh_keeps_previous_items(self):
        repo = FlakyRepository()
        c = make_controller("a", "b", repo=repo)
        repo.fail_list = True

        assert c.refresh() is False
        assert c.render_lines() == ["a", "b"]
        assert c.status is not None

    def test_failed_create_returns_to_list(self):
        repo = FlakyRepository()
        c = make_controller("a", repo=repo)
        repo.fail_create = True
        c.handle_key("o")
        type_text(c, "lost")
        c.handle_key("enter")

        assert c.mode is Mode.LIST
        assert c.render_lines() == ["a"]
        assert "Could not add item" in c.status

    def test_failed_delete_keeps_item_and_cursor(self):
        repo = FlakyRepository()
        c = make_controller("a", "b", repo=repo)
        c.handle_key("down")
        repo.fail_delete = True
        c.handle_key("d")

        assert c.render_lines() == ["a", "b"]
        assert c.cursor == 1
        assert "Could not delete item" in c.status

    def test_next_command_clears_status(self):
        repo = FlakyRepository()
        c = make_controller("a", repo=repo)
        repo.fail_list = True
        c.refresh()
        repo.fail_list = False
        c.handle_key("down")
        assert c.status is None

    def test_failures_are_logged(self, caplog):
        repo = FlakyRepository()
        c = make_controller("a", repo=repo)
        repo.fail_list = True
        with caplog.at_level("WARNING"):
            c.refresh()
        assert "Failed to load todos" in caplog.text


class TestQuit:
    def test_q_quits_from_list(self):
        c = make_controller()
        assert c.handle_key("q") is False
        assert c.handle_key("quit") is False

    def test_unbound_keys_do_nothing(self):
        c = make_controller("a", "b")
        assert c.handle_key("x") is True
        assert c.cursor == 0
        assert c.mode is Mode.LIST


class TestWithSQLite:
    def test_scenario_against_database(self, tmp_path):
        with SQLiteRepository(str(tmp_path / "db.sqlite")) as repo:
            c = Controller(repo)
            c.refresh()
            assert c.render_lines() == [EMPTY_MESSAGE]

            for title in ("Buy milk", "Walk dog"):
                c.handle_key("o")
                type_text(c, title)
                c.handle_key("enter")
            assert c.items == [{"id": 1, "title": "Buy milk"}, {"id": 2, "title": "Walk dog"}]

            c.handle_key("down")
            c.handle_key("d")
            assert c.items == [{"id": 1, "title": "Buy milk"}]
            assert c.cursor == 0
