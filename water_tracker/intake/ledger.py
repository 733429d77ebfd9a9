"""Today's intake log."""

import logging
from datetime import datetime

from .day_boundary import calendar_day
from .models import Entry, TrackerState

logger = logging.getLogger(__name__)

DISPLAY_TIME_FORMAT = "%I:%M %p"  # e.g. "10:05 AM"


class IntakeLedger:
    """
    Ordered entries for the active day, oldest first.

    Every operation mutates the shared state and persists it before
    returning.
    """

    def __init__(self, state: TrackerState, store):
        """
        Initialize ledger.

        Args:
            state: Tracker state shared with the other components
            store: Store that persists the state after each change
        """
        self.state = state
        self.store = store

    @property
    def entries(self) -> list[Entry]:
        return self.state.entries

    def add_entry(self, now: datetime) -> bool:
        """
        Log one glass at ``now``.

        Returns:
            True when this entry brings the count exactly to the goal
        """
        timestamp = int(now.timestamp() * 1000)
        if self.entries and timestamp <= self.entries[-1].timestamp:
            timestamp = self.entries[-1].timestamp + 1

        entry = Entry(
            display_time=now.strftime(DISPLAY_TIME_FORMAT),
            calendar_day=calendar_day(now),
            timestamp=timestamp,
        )
        self.entries.append(entry)
        self.store.save(self.state)

        just_reached_goal = len(self.entries) == self.state.goal
        logger.info(
            f"Logged glass at {entry.display_time} "
            f"({len(self.entries)}/{self.state.goal})"
        )
        if just_reached_goal:
            logger.info("Daily goal reached")
        return just_reached_goal

    def remove_last(self) -> list[Entry]:
        """Drop the most recent entry, if any."""
        if not self.entries:
            logger.debug("Ledger empty, nothing to remove")
            return self.entries

        removed = self.entries.pop()
        self.store.save(self.state)
        logger.info(f"Removed last glass ({removed.display_time})")
        return self.entries

    def remove_by_id(self, timestamp: int) -> list[Entry]:
        """Remove the entry with ``timestamp``; absent entries are ignored."""
        remaining = [entry for entry in self.entries if entry.timestamp != timestamp]
        if len(remaining) == len(self.entries):
            logger.debug(f"No entry with timestamp {timestamp}, ignoring")
            return self.entries

        self.state.entries = remaining
        self.store.save(self.state)
        logger.info(f"Removed glass {timestamp}")
        return self.entries

    def clear(self) -> list[Entry]:
        """Empty the ledger."""
        count = len(self.entries)
        self.state.entries = []
        self.store.save(self.state)
        logger.info(f"Cleared {count} entries")
        return self.entries
