"""Query text sources."""

from typing import Callable, Protocol

from .session import Disposable


class QuerySource(Protocol):
    """Anything that holds query text and reports changes to it."""

    def get_text(self) -> str: ...

    def on_did_change(self, callback: Callable[[], None]) -> Disposable: ...


class QueryBuffer:
    """In-memory query source, fed by a host's text input."""

    def __init__(self, text: str = ""):
        self._text = text
        self._listeners: list[Callable[[], None]] = []

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        if text == self._text:
            return
        self._text = text
        for listener in list(self._listeners):
            listener()

    def on_did_change(self, callback: Callable[[], None]) -> Disposable:
        self._listeners.append(callback)

        def dispose() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return dispose

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
