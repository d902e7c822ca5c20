"""TUI picker built on the select list."""

from dataclasses import replace
from typing import Any, Optional, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Input, Label, ListItem, ListView, Static

from .commands import Command, CommandRegistry
from .config import Config, load_config
from .fuzzy import get_scorer
from .query import QueryBuffer
from .select_list import SelectList, SelectListOptions


class ItemRow(ListItem):
    """One row of the filtered view."""

    def __init__(self, item: Any, text: str):
        super().__init__()
        self.item = item
        self.label_text = text

    def compose(self) -> ComposeResult:
        yield Label(self.label_text, markup=False)


class PickerApp(App[Any]):
    """Fuzzy picker: type to filter, arrows to move, enter to confirm."""

    CSS = """
    Screen {
        background: $surface;
    }
    #main-container {
        padding: 1 2;
    }
    #query-input {
        width: 100%;
        margin-bottom: 1;
    }
    #item-list {
        height: 1fr;
        min-height: 5;
        border: solid $primary;
    }
    #item-list > ItemRow {
        padding: 0 1;
    }
    #item-list > ItemRow.-highlight {
        background: $accent;
        text-style: bold;
    }
    #empty-message {
        color: $text-muted;
        padding: 0 1;
    }
    #status {
        height: auto;
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("up", "dispatch('move-previous')", "Up", show=False, priority=True),
        Binding("down", "dispatch('move-next')", "Down", show=False, priority=True),
        Binding("ctrl+p", "dispatch('move-previous')", "Previous", show=False),
        Binding("ctrl+n", "dispatch('move-next')", "Next", show=False),
        Binding("ctrl+home", "dispatch('move-to-first')", "First"),
        Binding("ctrl+end", "dispatch('move-to-last')", "Last"),
        Binding("escape", "dispatch('cancel')", "Cancel", priority=True),
    ]

    def __init__(
        self,
        items: Sequence[Any],
        config: Config | None = None,
        query: str = "",
        options: SelectListOptions | None = None,
    ):
        super().__init__()
        self.config = config or load_config()
        self.initial_items = list(items)
        self.query_buffer = QueryBuffer(query)
        self.command_registry = CommandRegistry()
        self.list_options = options
        self.select_list: Optional[SelectList] = None
        self.confirmed = False
        self._rendered_view: Optional[list] = None
        self.status_message = ""

    def compose(self) -> ComposeResult:
        with Vertical(id="main-container"):
            yield Input(
                value=self.query_buffer.get_text(),
                placeholder=self.config.ui.placeholder,
                id="query-input",
            )
            # Keys go to the query input; the list only mirrors the selection
            item_list = ListView(id="item-list")
            item_list.can_focus = False
            yield item_list
            yield Static("", id="empty-message", markup=False)
            yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        base = self.list_options or SelectListOptions(
            max_results=self.config.list.result_cap,
            empty_message=self.config.list.empty_message,
            scorer=get_scorer(self.config.filter.scorer, self.config.filter.threshold),
        )
        options = replace(
            base,
            items=self.initial_items,
            did_confirm_selection=self._did_confirm,
            did_cancel_selection=self._did_cancel,
        )

        self.select_list = SelectList(
            options,
            query_source=self.query_buffer,
            commands=self.command_registry,
            renderer=self._render_list,
        )
        self.query_one("#query-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "query-input":
            self.query_buffer.set_text(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "query-input":
            self.command_registry.dispatch(Command.CONFIRM)

    def action_dispatch(self, command: str) -> None:
        self.command_registry.dispatch(command)

    def _render_list(self, select_list: SelectList) -> None:
        """Sync widgets with the list's current view and selection."""
        view = select_list.filtered_items
        list_view = self.query_one("#item-list", ListView)
        empty = self.query_one("#empty-message", Static)

        list_view.display = bool(view)
        empty.display = not view
        empty.update(select_list.empty_message)

        if view != self._rendered_view:
            self._rendered_view = view
            rows = [ItemRow(item, select_list.view_for_item(item)) for item in view]
            self.call_later(self._replace_rows, select_list, rows)
        else:
            list_view.index = select_list.selection_index

        if self.config.ui.show_count:
            self._update_status(f"{len(view)}/{len(select_list.items)}")

    async def _replace_rows(self, select_list: SelectList, rows: list[ItemRow]) -> None:
        list_view = self.query_one("#item-list", ListView)
        await list_view.clear()
        if rows:
            await list_view.extend(rows)
        list_view.index = select_list.selection_index

    def _did_confirm(self, item: Any) -> None:
        self.confirmed = item is not None
        self.exit(item)

    def _did_cancel(self) -> None:
        self.exit(None)

    def _update_status(self, message: str) -> None:
        """Update status bar."""
        self.status_message = message
        self.query_one("#status", Static).update(message)


def run_picker(
    items: Sequence[Any],
    config: Config | None = None,
    query: str = "",
) -> Any:
    """Run the picker and return the confirmed item or None."""
    app = PickerApp(items, config, query)
    return app.run()
