import pytest
from textual.widgets import ListView, Static

from picklist.config import Config
from picklist.select_list import SelectListOptions
from picklist.tui import ItemRow, PickerApp

FRUIT = ["apple", "banana", "grape", "pear"]


def rows(app: PickerApp) -> list:
    return [row.item for row in app.query(ItemRow)]


def selected_rows(app: PickerApp) -> list:
    row = app.query_one("#item-list", ListView).highlighted_child
    return [row.item] if isinstance(row, ItemRow) else []


@pytest.mark.asyncio
async def test_shows_all_items_with_first_selected():
    app = PickerApp(FRUIT, Config())

    async with app.run_test() as pilot:
        await pilot.pause()
        assert rows(app) == FRUIT
        assert selected_rows(app) == ["apple"]
        assert app.status_message == "4/4"


@pytest.mark.asyncio
async def test_typing_filters_and_enter_confirms():
    app = PickerApp(FRUIT, Config())

    async with app.run_test() as pilot:
        await pilot.press("p", "e")
        await pilot.pause()
        assert app.select_list.get_query() == "pe"
        assert rows(app) == ["pear", "grape", "apple"]

        await pilot.press("down")
        await pilot.pause()
        assert selected_rows(app) == ["grape"]

        await pilot.press("enter")

    assert app.return_value == "grape"
    assert app.confirmed


@pytest.mark.asyncio
async def test_navigation_wraps():
    app = PickerApp(FRUIT, Config())

    async with app.run_test() as pilot:
        await pilot.press("up")
        await pilot.pause()
        assert app.select_list.get_selected_item() == "pear"

        await pilot.press("down")
        await pilot.pause()
        assert selected_rows(app) == ["apple"]


@pytest.mark.asyncio
async def test_escape_cancels():
    app = PickerApp(FRUIT, Config())

    async with app.run_test() as pilot:
        await pilot.press("escape")

    assert app.return_value is None
    assert not app.confirmed


@pytest.mark.asyncio
async def test_empty_message_when_nothing_matches():
    config = Config()
    config.list.empty_message = "No fruit"
    app = PickerApp(FRUIT, config, query="xyz")

    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.select_list.filtered_items == []
        assert app.query_one("#item-list", ListView).display is False
        empty = app.query_one("#empty-message", Static)
        assert empty.display is True
        assert app.select_list.empty_message == "No fruit"


@pytest.mark.asyncio
async def test_max_results_from_config():
    config = Config()
    config.list.max_results = 2
    app = PickerApp(FRUIT, config)

    async with app.run_test() as pilot:
        await pilot.pause()
        assert rows(app) == ["apple", "banana"]


@pytest.mark.asyncio
async def test_update_items_while_running():
    app = PickerApp(FRUIT, Config())

    async with app.run_test() as pilot:
        await pilot.pause()
        await app.select_list.update(items=["kiwi", "lime"])
        await pilot.pause()
        assert rows(app) == ["kiwi", "lime"]
        assert selected_rows(app) == ["kiwi"]


@pytest.mark.asyncio
async def test_custom_options_and_view_for_item():
    options = SelectListOptions(
        filter_key_for_item=lambda item: item["name"],
        view_for_item=lambda item: item["name"].upper(),
    )
    items = [{"name": "pear"}, {"name": "banana"}]
    app = PickerApp(items, Config(), query="pe", options=options)

    async with app.run_test() as pilot:
        await pilot.pause()
        assert rows(app) == [{"name": "pear"}]
        row = app.query_one(ItemRow)
        assert row.label_text == "PEAR"


@pytest.mark.asyncio
async def test_caller_options_are_left_untouched():
    def did_confirm(item):
        pass

    options = SelectListOptions(items=["x"], did_confirm_selection=did_confirm)
    app = PickerApp(["a"], Config(), options=options)

    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.select_list.items == ["a"]

    assert options.items == ["x"]
    assert options.did_confirm_selection is did_confirm
    assert options.did_cancel_selection is None


@pytest.mark.asyncio
async def test_rows_replaced_as_query_changes():
    app = PickerApp(FRUIT, Config())

    async with app.run_test() as pilot:
        await pilot.press("g")
        await pilot.pause()
        assert rows(app) == ["grape"]
        assert len(app.query_one("#item-list", ListView).children) == 1

        await pilot.press("backspace")
        await pilot.pause()
        assert rows(app) == FRUIT
        assert selected_rows(app) == ["apple"]
