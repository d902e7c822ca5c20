"""Abstract list commands and an explicit registry to dispatch them."""

from enum import Enum
from typing import Callable, Mapping, Union

from .logger import get_logger
from .session import Disposable

logger = get_logger("commands")


class Command(Enum):
    MOVE_NEXT = "move-next"
    MOVE_PREVIOUS = "move-previous"
    MOVE_TO_FIRST = "move-to-first"
    MOVE_TO_LAST = "move-to-last"
    CONFIRM = "confirm"
    CANCEL = "cancel"


CommandName = Union[Command, str]


def resolve_command(command: CommandName) -> Command:
    """Turn a command or its name into a Command."""
    if isinstance(command, Command):
        return command
    try:
        return Command(command)
    except ValueError:
        raise ValueError(f"Unknown command: {command}") from None


class CommandRegistry:
    """
    Maps commands to handlers.

    Hosts own a registry and hand it to the list; the list binds its
    handlers and removes them again when its session ends.
    """

    def __init__(self):
        self._handlers: dict[Command, list[Callable[[], object]]] = {}

    def add(self, handlers: Mapping[CommandName, Callable[[], object]]) -> Disposable:
        """Bind handlers. Returns a disposable that unbinds them."""
        bound = [(resolve_command(name), handler) for name, handler in handlers.items()]
        for command, handler in bound:
            self._handlers.setdefault(command, []).append(handler)

        def dispose() -> None:
            for command, handler in bound:
                registered = self._handlers.get(command, [])
                if handler in registered:
                    registered.remove(handler)

        return dispose

    def has_handler(self, command: CommandName) -> bool:
        return bool(self._handlers.get(resolve_command(command)))

    def dispatch(self, command: CommandName) -> bool:
        """Run the handlers for command. Returns False if nothing is bound."""
        command = resolve_command(command)
        handlers = list(self._handlers.get(command, []))
        if not handlers:
            logger.debug(f"No handler bound for {command.value}")
            return False
        for handler in handlers:
            handler()
        return True
