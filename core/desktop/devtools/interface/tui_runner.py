"""Runners execute deferred store work and post the resulting event back.

Work callables return an event (or None when there is nothing to report).
`DataError` raised by the work becomes a `DataFailed` event.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from core import DataError
from core.desktop.devtools.interface.tui_events import DataFailed

logger = logging.getLogger("stm.app")

Work = Callable[[], Any]
Post = Callable[[Any], None]


def _execute(operation: str, work: Work) -> Any:
    try:
        return work()
    except DataError as exc:
        return DataFailed(operation, exc.message or str(exc))


class InlineRunner:
    """Runs work immediately on the calling thread."""

    def submit(self, operation: str, work: Work, post: Post) -> None:
        event = _execute(operation, work)
        if event is not None:
            post(event)

    def shutdown(self) -> None:
        return None


class ThreadedRunner:
    """Runs work on one background thread, posting results to the UI loop.

    A single worker keeps store calls in submission order. Results are handed
    to the event loop that was running when the work was submitted, so handlers
    never execute on the worker thread.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="stm-store")

    def submit(self, operation: str, work: Work, post: Post) -> None:
        loop = self._loop or asyncio.get_running_loop()

        def job() -> None:
            event = _execute(operation, work)
            if event is not None:
                loop.call_soon_threadsafe(post, event)

        future = self._executor.submit(job)
        future.add_done_callback(_log_crash)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)


def _log_crash(future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("background work crashed", exc_info=exc)


__all__ = ["InlineRunner", "ThreadedRunner"]
