"""Built-in timer host that fires the scheduled trigger periodically."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .dispatch import RequestDispatcher

logger = logging.getLogger(__name__)


async def run_periodic(
    dispatcher: RequestDispatcher,
    interval: float,
    lifespan: Optional[float] = None,
    run_immediately: bool = True,
) -> int:
    """Invoke ``dispatcher.scheduled`` every ``interval`` seconds.

    Args:
        dispatcher: Dispatcher whose timer trigger is fired.
        interval: Seconds between the start of consecutive runs.
        lifespan: Maximum time in seconds to keep running. If None, runs indefinitely.
        run_immediately: Fire once at startup instead of waiting a full interval.

    Returns:
        Number of runs that were started.
    """
    if interval <= 0:
        raise ValueError("interval must be positive")

    loop = asyncio.get_running_loop()
    deadline = None if lifespan is None else loop.time() + lifespan
    next_run = loop.time() if run_immediately else loop.time() + interval
    runs = 0

    while True:
        now = loop.time()
        if deadline is not None and next_run >= deadline:
            remaining = deadline - now
            if remaining > 0:
                await asyncio.sleep(remaining)
            break
        if next_run > now:
            await asyncio.sleep(next_run - now)

        runs += 1
        logger.info(f"Running scheduled credential update #{runs}")
        await dispatcher.scheduled()
        next_run = max(next_run + interval, loop.time())

    logger.info(f"Scheduler stopped after {runs} runs")
    return runs
