"""Day rollover and streak continuity."""

import logging
from datetime import datetime

from .models import DayTransition, TrackerState

logger = logging.getLogger(__name__)

CALENDAR_DAY_FORMAT = "%a %b %d %Y"  # e.g. "Mon Jan 01 2024"


def calendar_day(dt: datetime) -> str:
    """Format a datetime as its calendar day, discarding time of day."""
    return dt.strftime(CALENDAR_DAY_FORMAT)


def roll_over(
    last_active_day: str, today: str, count: int, goal: int, streak: int
) -> DayTransition:
    """
    Decide the streak and ledger outcome of an activation.

    Only the ledger that was open on the last active day is judged, no
    matter how many days have passed since then.

    Args:
        last_active_day: Stored day marker ("" on first run)
        today: Current calendar day
        count: Entries in the stored ledger
        goal: Stored goal
        streak: Stored streak

    Returns:
        DayTransition describing the new streak and whether to clear entries
    """
    if not last_active_day:
        return DayTransition(streak=streak, last_active_day=today, changed=True)

    if last_active_day == today:
        return DayTransition(streak=streak, last_active_day=today)

    new_streak = streak + 1 if count >= goal else 0
    return DayTransition(
        streak=new_streak,
        last_active_day=today,
        clear_entries=True,
        changed=True,
    )


class DayBoundaryEvaluator:
    """Applies the day rollover to freshly loaded state."""

    def __init__(self, store):
        """Initialize with the store used to persist a transition."""
        self.store = store

    def evaluate(self, state: TrackerState, now: datetime) -> DayTransition:
        """Normalize state for today and persist it if anything changed."""
        today = calendar_day(now)
        transition = roll_over(
            state.last_active_day,
            today,
            len(state.entries),
            state.goal,
            state.streak,
        )

        if not transition.changed:
            logger.debug(f"Same day ({today}), keeping {len(state.entries)} entries")
            return transition

        if not state.last_active_day:
            logger.info(f"First run, starting on {today}")
        else:
            logger.info(
                f"New day: {state.last_active_day} -> {today} "
                f"({len(state.entries)}/{state.goal}), "
                f"streak {state.streak} -> {transition.streak}"
            )

        state.streak = transition.streak
        state.last_active_day = transition.last_active_day
        if transition.clear_entries:
            state.entries = []

        self.store.save(state)
        return transition
