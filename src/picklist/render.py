"""Deferred, coalesced render commits."""

import asyncio
from typing import Callable, Optional

from .logger import get_logger

logger = get_logger("render")


class RenderScheduler:
    """
    Runs commit at most once per loop iteration.

    schedule() marks the view dirty and queues a single commit on the running
    event loop; further calls before it runs share that commit, which sees
    only the latest state. Outside an event loop the commit runs immediately.
    """

    def __init__(self, commit: Callable[[], None]):
        self._commit = commit
        self._dirty = False
        self._handle: Optional[asyncio.Handle] = None
        self._waiters: list[asyncio.Future] = []
        self.commit_count = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, wait: bool = False) -> Optional[asyncio.Future]:
        """
        Request a commit.

        With wait=True, returns a future resolved once the commit has run
        (None when it already ran synchronously). A failed commit is set on
        those futures; with no one waiting it goes to the loop's exception
        handler instead.
        """
        self._dirty = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._flush()
            return None

        future = None
        if wait:
            future = loop.create_future()
            self._waiters.append(future)
        if self._handle is None:
            self._handle = loop.call_soon(self._run_pending, loop)
        return future

    def _flush(self) -> None:
        if not self._dirty:
            return
        self._dirty = False
        self.commit_count += 1
        self._commit()

    def _run_pending(self, loop: asyncio.AbstractEventLoop) -> None:
        self._handle = None
        waiters, self._waiters = self._waiters, []
        try:
            self._flush()
        except Exception as e:
            logger.error(f"Render commit failed: {e}")
            waiters = [waiter for waiter in waiters if not waiter.done()]
            if not waiters:
                loop.call_exception_handler({
                    "message": "Render commit failed",
                    "exception": e,
                })
            for waiter in waiters:
                waiter.set_exception(e)
            return
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

    def cancel(self) -> None:
        """Drop any pending commit and release its waiters."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._dirty = False
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)
