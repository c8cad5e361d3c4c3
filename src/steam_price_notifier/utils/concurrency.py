"""
Fail-fast task groups.

Every write batch in a run is a fan-out of one task per item. The
batch either completes in full or stops at its first failure: the
siblings still running are cancelled and only that first error is
re-raised. Work already committed upstream is not rolled back.
"""

import asyncio
from collections.abc import Awaitable, Iterable
from typing import TypeVar

T = TypeVar("T")


async def gather_fail_fast(aws: Iterable[Awaitable[T]]) -> list[T]:
    """
    Run awaitables concurrently and return their results in input order.

    Args:
        aws: Coroutines or futures to run as sibling tasks

    Returns:
        list[T]: One result per awaitable, in the order given

    Raises:
        Exception: The first exception raised by any sibling. Pending
            siblings are cancelled and drained before it propagates.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        await _cancel_and_drain(tasks)
        raise

    # exception() also marks later failures as retrieved
    errors = {t: t.exception() for t in done if not t.cancelled()}
    first_error = next((e for t in tasks if (e := errors.get(t)) is not None), None)
    if first_error is None:
        return [t.result() for t in tasks]

    await _cancel_and_drain(pending)
    raise first_error


async def _cancel_and_drain(tasks: Iterable["asyncio.Future[T]"]) -> None:
    outstanding = [t for t in tasks if not t.done()]
    for task in outstanding:
        task.cancel()
    if outstanding:
        await asyncio.gather(*outstanding, return_exceptions=True)
