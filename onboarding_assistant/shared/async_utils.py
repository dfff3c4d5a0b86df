"""Helpers for driving coroutines from synchronous Flask and CLI code."""

import asyncio
import logging
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def create_event_loop() -> asyncio.AbstractEventLoop:
    """Create a fresh event loop and make it current for this thread."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    return loop


def run_coroutine(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a coroutine on a fresh event loop and tear the loop down afterwards.

    Like asyncio.run, but tolerant of being called from a thread that already
    had a loop set (Flask dev server worker threads), and it cancels any tasks
    the coroutine left behind so the HTTP client sessions close cleanly.
    """
    loop = create_event_loop()

    try:
        return loop.run_until_complete(coro)
    finally:
        try:
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()

            if pending:
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))

            loop.run_until_complete(loop.shutdown_asyncgens())
        except RuntimeError as e:
            logger.debug(f"Event loop shutdown raised: {e}")
        finally:
            asyncio.set_event_loop(None)
            loop.close()
