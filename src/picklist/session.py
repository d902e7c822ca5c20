"""Session lifecycle and subscription bookkeeping."""

from enum import Enum
from typing import Callable

from .logger import get_logger

logger = get_logger("session")

Disposable = Callable[[], None]


class CompositeDisposable:
    """A bag of disposables released together, at most once."""

    def __init__(self):
        self._disposables: list[Disposable] = []
        self.disposed = False

    def add(self, disposable: Disposable) -> None:
        if self.disposed:
            disposable()
            return
        self._disposables.append(disposable)

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        disposables, self._disposables = self._disposables, []
        for disposable in disposables:
            disposable()

    def __len__(self) -> int:
        return len(self._disposables)


class SessionState(Enum):
    ACTIVE = "active"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Session:
    """Active -> Confirmed | Cancelled. Both end states are terminal."""

    def __init__(self):
        self.state = SessionState.ACTIVE

    @property
    def active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def _finish(self, state: SessionState) -> bool:
        if not self.active:
            logger.debug(f"Ignoring {state.value}: session already {self.state.value}")
            return False
        self.state = state
        logger.debug(f"Session {state.value}")
        return True

    def confirm(self) -> bool:
        """Move to CONFIRMED. Returns False if the session already ended."""
        return self._finish(SessionState.CONFIRMED)

    def cancel(self) -> bool:
        """Move to CANCELLED. Returns False if the session already ended."""
        return self._finish(SessionState.CANCELLED)
