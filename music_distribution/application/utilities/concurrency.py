"""Bounded concurrent fan-out for independent reads.

Use cases sometimes need two lookups that do not depend on each other, such as
a release and a song. ``fetch_concurrently`` runs them together and joins
them, failing fast: the first failure cancels whatever is still running and is
re-raised unchanged.
"""

import asyncio
from collections.abc import Awaitable
from typing import Any


async def fetch_concurrently(*awaitables: Awaitable[Any]) -> tuple[Any, ...]:
    """Await all ``awaitables`` concurrently and return results in order.

    Raises:
        The first exception raised by any awaitable (in launch order when
        several fail together). Remaining work is cancelled before returning.
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    if not tasks:
        return ()

    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    failures = [
        task.exception()
        for task in tasks
        if not task.cancelled() and task.exception() is not None
    ]
    if failures:
        raise failures[0]

    return tuple(task.result() for task in tasks)
