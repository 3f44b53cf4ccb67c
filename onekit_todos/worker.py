"""Background workers fed by the message channel and a one-shot future."""

from __future__ import annotations

import asyncio
import json
from typing import Any

WORKER_DELAY_SECONDS = 60.0


async def _consume(queue: asyncio.Queue, delay: float) -> None:
    # A None on the queue means every sender is gone.
    while (message := await queue.get()) is not None:
        print(f"Received: {message}")
        await asyncio.sleep(delay)


def _debug(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return repr(value)


async def _await_oneshot(oneshot: asyncio.Future) -> None:
    try:
        value = await asyncio.shield(oneshot)
    except asyncio.CancelledError:
        if not oneshot.cancelled():
            raise
        print("the sender dropped")
        return
    print(f"got = {_debug(value)}")


def worker_start(
    queue: asyncio.Queue,
    oneshot: asyncio.Future,
    delay: float = WORKER_DELAY_SECONDS,
) -> tuple[asyncio.Task, asyncio.Task]:
    """Start the channel consumer and the one-shot waiter; return their tasks."""
    return (
        asyncio.create_task(_consume(queue, delay)),
        asyncio.create_task(_await_oneshot(oneshot)),
    )