"""Tests for SelectionController."""

import pytest

from picklist.selection import SelectionController


class Harness:
    def __init__(self, view):
        self.view = list(view)
        self.changes = []
        self.controller = SelectionController(lambda: self.view, self.changes.append)


@pytest.fixture
def fruit():
    return Harness(["pear", "grape", "apple"])


class TestNavigation:
    def test_starts_at_first_item(self, fruit):
        assert fruit.controller.index == 0
        assert fruit.controller.get_selected() == "pear"

    def test_next_wraps_to_start(self, fruit):
        fruit.controller.select_last()
        fruit.controller.select_next()
        assert fruit.controller.index == 0

    def test_previous_wraps_to_end(self, fruit):
        fruit.controller.select_previous()
        assert fruit.controller.index == 2
        assert fruit.changes == ["apple"]

    def test_first_and_last_ignore_prior_index(self, fruit):
        for _ in range(2):
            fruit.controller.select_next()
            fruit.controller.select_first()
            assert fruit.controller.index == 0
            fruit.controller.select_last()
            assert fruit.controller.index == 2

    def test_every_move_notifies(self):
        harness = Harness(["only"])
        harness.controller.select_next()
        harness.controller.select_first()
        assert harness.changes == ["only", "only"]


class TestEmptyView:
    @pytest.mark.parametrize("move", ["select_next", "select_previous", "select_first", "select_last"])
    def test_moves_are_noops(self, move):
        harness = Harness([])

        assert getattr(harness.controller, move)() is False
        assert harness.controller.index is None
        assert harness.controller.get_selected() is None
        assert harness.changes == []


class TestClamp:
    def test_out_of_range_falls_back_to_first(self):
        harness = Harness(["a", "b", "c", "d"])
        harness.controller.select_next()
        harness.controller.select_next()
        harness.view = ["z"]
        harness.controller.clamp()
        assert harness.controller.index == 0

    def test_valid_index_is_kept(self):
        harness = Harness(["a", "b", "c"])
        harness.controller.select_next()
        harness.view = ["x", "y"]
        harness.controller.clamp()
        assert harness.controller.index == 1

    def test_empty_then_non_empty(self):
        harness = Harness(["a"])
        harness.view = []
        harness.controller.clamp()
        assert harness.controller.index is None
        harness.view = ["b", "c"]
        harness.controller.clamp()
        assert harness.controller.index == 0

    def test_reset(self):
        harness = Harness(["a", "b"])
        harness.controller.select_last()
        harness.controller.reset()
        assert harness.controller.index == 0
