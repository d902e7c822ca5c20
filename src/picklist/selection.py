"""Selection controller over the filtered view."""

from typing import Any, Callable, Optional, Sequence


class SelectionController:
    """
    Tracks the selected index into a view supplied by view_provider.

    Navigation wraps around at both ends and is a no-op on an empty view.
    Every navigation on a non-empty view calls on_change with the selected
    item, even when the item is unchanged.
    """

    def __init__(
        self,
        view_provider: Callable[[], Sequence[Any]],
        on_change: Optional[Callable[[Any], None]] = None,
    ):
        self._view = view_provider
        self._on_change = on_change
        self._index: Optional[int] = 0 if self._view() else None

    @property
    def index(self) -> Optional[int]:
        """Selected index, None when the view is empty."""
        return self._index

    def get_selected(self) -> Any:
        """Item at the selected index, or None."""
        view = self._view()
        if self._index is None or not view:
            return None
        return view[self._index]

    def reset(self) -> None:
        """Select the first item (or nothing if the view is empty)."""
        self._index = 0 if self._view() else None

    def clamp(self) -> None:
        """Keep the index if still valid, otherwise fall back to the first item."""
        length = len(self._view())
        if length == 0:
            self._index = None
        elif self._index is None or self._index >= length:
            self._index = 0

    def notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.get_selected())

    def _move(self, compute: Callable[[int, int], int]) -> bool:
        length = len(self._view())
        if length == 0:
            self._index = None
            return False
        current = self._index if self._index is not None else 0
        self._index = compute(current, length)
        self.notify()
        return True

    def select_next(self) -> bool:
        return self._move(lambda i, n: (i + 1) % n)

    def select_previous(self) -> bool:
        return self._move(lambda i, n: n - 1 if i == 0 else i - 1)

    def select_first(self) -> bool:
        return self._move(lambda i, n: 0)

    def select_last(self) -> bool:
        return self._move(lambda i, n: n - 1)
