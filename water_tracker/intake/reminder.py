"""Drink reminders."""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from .models import Entry

logger = logging.getLogger(__name__)

REMINDER_DELAY = timedelta(hours=2)


def is_overdue(
    now: datetime, last_timestamp: Optional[int], delay: timedelta = REMINDER_DELAY
) -> bool:
    """
    Check whether too long has passed since the last glass.

    Args:
        now: Current time
        last_timestamp: Epoch ms of the latest entry, None if ledger is empty
        delay: Allowed gap between glasses

    Returns:
        True if the gap is strictly longer than ``delay``
    """
    if last_timestamp is None:
        return False
    elapsed_ms = int(now.timestamp() * 1000) - last_timestamp
    return elapsed_ms > delay.total_seconds() * 1000


class ReminderPolicy:
    """Keeps the current overdue flag."""

    def __init__(self, delay: timedelta = REMINDER_DELAY):
        self.delay = delay
        self.overdue = False

    def evaluate(self, now: datetime, entries: list[Entry]) -> bool:
        last_timestamp = entries[-1].timestamp if entries else None
        overdue = is_overdue(now, last_timestamp, self.delay)
        if overdue != self.overdue:
            logger.info("Reminder due" if overdue else "Reminder cleared")
        self.overdue = overdue
        return overdue

    def clear(self):
        """Force not-overdue, e.g. right after a glass is logged."""
        self.overdue = False


class ReminderTicker:
    """Background task that calls ``check`` every ``interval`` seconds."""

    def __init__(self, check: Callable[[], bool], interval: float = 60):
        self.check = check
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    def start(self):
        """Start ticking on the running event loop."""
        if self._task is None:
            self._task = asyncio.create_task(self._run())
            logger.info(f"Reminder check every {self.interval}s")

    async def stop(self):
        """Cancel the task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Reminder check stopped")

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.check()
            except Exception as e:
                logger.error(f"Reminder check failed: {e}")
