"""Query-filterable selection list controller."""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Optional, Sequence

from .commands import Command, CommandRegistry
from .filtering import CustomFilter, FilterOptions, filter_items
from .fuzzy import Scorer, score
from .logger import get_logger
from .query import QuerySource
from .render import RenderScheduler
from .selection import SelectionController
from .session import CompositeDisposable, Session, SessionState

logger = get_logger("select_list")


@dataclass
class SelectListOptions:
    """Initial configuration of a SelectList. Every field can be changed via update()."""

    items: Sequence[Any] = field(default_factory=list)
    max_results: Optional[int] = None
    empty_message: str = ""
    filter_key_for_item: Optional[Callable[[Any], str]] = None
    filter: Optional[CustomFilter] = None
    scorer: Scorer = score
    did_change_selection: Optional[Callable[[Any], None]] = None
    did_confirm_selection: Optional[Callable[[Any], None]] = None
    did_cancel_selection: Optional[Callable[[], None]] = None
    view_for_item: Optional[Callable[[Any], str]] = None


OPTION_NAMES = frozenset(f.name for f in fields(SelectListOptions))


class SelectList:
    """
    Filtered, navigable view over a set of items.

    State changes happen synchronously and notify the host straight away;
    the renderer is called later, once per event loop turn, with this list.
    Confirming or cancelling ends the session and unbinds the query source
    and commands, after which every mutation is ignored.
    """

    def __init__(
        self,
        options: Optional[SelectListOptions] = None,
        query_source: Optional[QuerySource] = None,
        commands: Optional[CommandRegistry] = None,
        renderer: Optional[Callable[["SelectList"], None]] = None,
    ):
        options = options or SelectListOptions()
        self.options = replace(options, items=list(options.items))
        self.session = Session()
        self.query_source = query_source
        self.commands = commands
        self.disposables = CompositeDisposable()

        self._query = query_source.get_text() if query_source is not None else ""
        self._filtered: list = self._compute(self.options, self._query)
        self.selection = SelectionController(lambda: self._filtered, self._did_change_selection)
        self._renderer = renderer
        self._scheduler = RenderScheduler(self._commit)

        if query_source is not None:
            self.disposables.add(query_source.on_did_change(self._did_change_query))
        if commands is not None:
            self.disposables.add(commands.add(self._command_handlers()))
        self.disposables.add(self._scheduler.cancel)

        self.selection.notify()
        self._scheduler.schedule()

    # -- state ---------------------------------------------------------------

    @property
    def items(self) -> list:
        return list(self.options.items)

    @property
    def filtered_items(self) -> list:
        return list(self._filtered)

    @property
    def selection_index(self) -> Optional[int]:
        return self.selection.index

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def empty_message(self) -> str:
        return self.options.empty_message

    def get_query(self) -> str:
        return self._query

    def get_selected_item(self) -> Any:
        return self.selection.get_selected()

    def view_for_item(self, item: Any) -> str:
        if self.options.view_for_item is not None:
            return self.options.view_for_item(item)
        return item if isinstance(item, str) else str(item)

    # -- mutation ------------------------------------------------------------

    def set_query(self, query: str) -> None:
        """Filter with a new query and select the first match."""
        if not self._accepting("set_query"):
            return
        view = self._compute(self.options, query)
        self._query = query
        self._filtered = view
        self.selection.reset()
        logger.debug(f"Query {query!r}: {len(view)} of {len(self.options.items)} items")
        self.selection.notify()
        self._scheduler.schedule()

    def set_items(self, items: Sequence[Any]) -> None:
        """Replace the items, keeping the selected index when still valid."""
        if not self._accepting("set_items"):
            return
        self._apply(replace(self.options, items=list(items)))
        self._scheduler.schedule()

    async def update(self, **props: Any) -> None:
        """
        Apply a partial configuration and wait for the resulting render.

        Accepts any SelectListOptions field, most commonly ``items``;
        ``items=None`` leaves the current items in place.
        """
        unknown = set(props) - OPTION_NAMES
        if unknown:
            raise TypeError(f"Unknown options: {', '.join(sorted(unknown))}")
        if not self._accepting("update"):
            return
        if "items" in props:
            if props["items"] is None:
                del props["items"]
            else:
                props["items"] = list(props["items"])
        self._apply(replace(self.options, **props))
        pending = self._scheduler.schedule(wait=True)
        if pending is not None:
            await pending

    def _apply(self, options: SelectListOptions) -> None:
        before = self._selection_key()
        view = self._compute(options, self._query)
        self.options = options
        self._filtered = view
        self.selection.clamp()
        logger.debug(f"Items replaced: {len(view)} of {len(options.items)} items shown")
        if not self._same_selection(before, self._selection_key()):
            self.selection.notify()

    # -- navigation ----------------------------------------------------------

    def select_next(self) -> bool:
        return self._navigate(self.selection.select_next)

    def select_previous(self) -> bool:
        return self._navigate(self.selection.select_previous)

    def select_first(self) -> bool:
        return self._navigate(self.selection.select_first)

    def select_last(self) -> bool:
        return self._navigate(self.selection.select_last)

    def _navigate(self, move: Callable[[], bool]) -> bool:
        if not self._accepting("navigation"):
            return False
        moved = move()
        if moved:
            self._scheduler.schedule()
        return moved

    # -- lifecycle -----------------------------------------------------------

    def confirm(self) -> bool:
        """Confirm the selected item. Returns False if the session already ended."""
        if not self.session.confirm():
            return False
        selected = self.get_selected_item()
        try:
            if self.options.did_confirm_selection is not None:
                self.options.did_confirm_selection(selected)
        finally:
            self.dispose()
        return True

    def cancel(self) -> bool:
        """End the session without a selection. Returns False if it already ended."""
        if not self.session.cancel():
            return False
        try:
            if self.options.did_cancel_selection is not None:
                self.options.did_cancel_selection()
        finally:
            self.dispose()
        return True

    def destroy(self) -> None:
        """Cancel if still active, then release everything."""
        if not self.cancel():
            self.dispose()

    def dispose(self) -> None:
        """Release the query subscription, command bindings and pending render."""
        self.disposables.dispose()

    # -- internals -----------------------------------------------------------

    def _compute(self, options: SelectListOptions, query: str) -> list:
        return filter_items(
            options.items,
            query,
            FilterOptions(
                filter_key=options.filter_key_for_item,
                custom_filter=options.filter,
                max_results=options.max_results,
                scorer=options.scorer,
            ),
        )

    def _accepting(self, operation: str) -> bool:
        if self.session.active:
            return True
        logger.debug(f"Ignoring {operation}: session {self.session.state.value}")
        return False

    def _selection_key(self) -> tuple[bool, Any]:
        return (self.selection.index is None, self.get_selected_item())

    @staticmethod
    def _same_selection(before: tuple[bool, Any], after: tuple[bool, Any]) -> bool:
        if before[0] != after[0]:
            return False
        return before[1] is after[1] or before[1] == after[1]

    def _did_change_selection(self, item: Any) -> None:
        if self.options.did_change_selection is not None:
            self.options.did_change_selection(item)

    def _did_change_query(self) -> None:
        self.set_query(self.query_source.get_text())

    def _command_handlers(self) -> dict[Command, Callable[[], object]]:
        return {
            Command.MOVE_NEXT: self.select_next,
            Command.MOVE_PREVIOUS: self.select_previous,
            Command.MOVE_TO_FIRST: self.select_first,
            Command.MOVE_TO_LAST: self.select_last,
            Command.CONFIRM: self.confirm,
            Command.CANCEL: self.cancel,
        }

    def _commit(self) -> None:
        if self._renderer is not None:
            self._renderer(self)
