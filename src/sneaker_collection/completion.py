"""
Completion bridge between callback-style store calls and asyncio.

The Firestore admin SDK is blocking. ``dispatch`` runs a blocking call on an
executor and reports its outcome to an error-first callback; ``await_completion``
turns such a one-shot callback into a single awaitable result.

Example:
    >>> async def write(doc_ref, executor):
    ...     await await_completion(
    ...         lambda done: dispatch(executor, doc_ref.set, {"a": 1}, callback=done)
    ...     )
"""

import asyncio
import logging
import threading
from concurrent.futures import Executor
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Completion = Callable[[Optional[BaseException]], None]


def dispatch(
    executor: Executor,
    func: Callable[..., Any],
    *args: Any,
    callback: Completion,
    **kwargs: Any,
) -> None:
    """
    Run ``func(*args, **kwargs)`` on ``executor`` and report to ``callback``.

    ``callback`` is invoked once from the worker thread with ``None`` on
    success or with the raised exception on failure. The return value of
    ``func`` is discarded.
    """
    future = executor.submit(func, *args, **kwargs)

    def _on_done(done) -> None:
        if done.cancelled():
            callback(RuntimeError(f"{func!r} was cancelled before it ran"))
            return
        callback(done.exception())

    future.add_done_callback(_on_done)


async def await_completion(start: Callable[[Completion], None]) -> None:
    """
    Await an operation that signals completion through an error-first callback.

    ``start`` is called immediately with a callback. The returned coroutine
    finishes when that callback is invoked with ``None`` and raises the error
    it is invoked with otherwise. The callback may be invoked from any thread.

    Only the first invocation counts; later ones are logged and ignored. If
    the awaiting task is cancelled the underlying operation keeps running and
    its eventual outcome is dropped.

    Args:
        start: Function that begins the operation and arranges for the given
               callback to be invoked once when it finishes.

    Raises:
        BaseException: Whatever error the callback reports, unchanged.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()
    lock = threading.Lock()
    invoked = False

    def _resolve(error: Optional[BaseException]) -> None:
        if future.done():
            logger.debug(f"Dropping completion for finished operation: {error!r}")
            return
        if error is None:
            future.set_result(None)
        else:
            future.set_exception(error)

    def callback(error: Optional[BaseException] = None) -> None:
        nonlocal invoked
        with lock:
            if invoked:
                logger.warning(
                    f"Completion callback invoked more than once, ignoring: {error!r}"
                )
                return
            invoked = True
        try:
            loop.call_soon_threadsafe(_resolve, error)
        except RuntimeError:
            logger.debug(
                f"Event loop closed before completion was delivered: {error!r}"
            )

    start(callback)
    await future
