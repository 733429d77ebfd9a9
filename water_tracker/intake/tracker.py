"""Tracker controller tying the intake components together."""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable

from .day_boundary import DayBoundaryEvaluator
from .goal import GoalTracker, clamp_goal, percent, remaining_label, water_color
from .ledger import IntakeLedger
from .models import TrackerState, TrackerView
from .reminder import REMINDER_DELAY, ReminderPolicy
from .store import IntakeStore

logger = logging.getLogger(__name__)

NO_ENTRY_TIME = "—"


class WaterTracker:
    """
    Single owner of the session's TrackerState.

    Components receive the same state object; only this class decides
    when they run. Each public action returns a fresh TrackerView.
    """

    def __init__(
        self,
        store: IntakeStore,
        clock: Callable[[], datetime] = datetime.now,
        reminder_delay: timedelta = REMINDER_DELAY,
    ):
        """
        Initialize tracker.

        Args:
            store: Persistence backend
            clock: Returns the current local time
            reminder_delay: Gap after which a reminder is due
        """
        self.store = store
        self.clock = clock
        self.state = TrackerState()
        self.reminder = ReminderPolicy(reminder_delay)
        self._active = False
        self._bind(self.state)

    def _bind(self, state: TrackerState):
        self.state = state
        self.ledger = IntakeLedger(state, self.store)
        self.goals = GoalTracker(state, self.store)
        self.day_boundary = DayBoundaryEvaluator(self.store)

    def activate(self) -> TrackerView:
        """
        Load persisted state and normalize it for today.

        Runs the day rollover before anything is derived from the state.
        """
        state = self.store.load()

        goal = clamp_goal(state.goal)
        if goal != state.goal:
            logger.warning(f"Stored goal {state.goal} out of range, using {goal}")
            state.goal = goal
        if state.streak < 0:
            logger.warning(f"Stored streak {state.streak} is negative, resetting")
            state.streak = 0

        self._bind(state)
        self._active = True
        now = self.clock()
        self.day_boundary.evaluate(state, now)
        self.reminder.evaluate(now, state.entries)

        logger.info(
            f"Activated for {state.last_active_day}: "
            f"{len(state.entries)}/{state.goal}, streak {state.streak}"
        )
        return self._derive()

    def _check_day(self) -> datetime:
        """
        Roll over if the calendar day changed since the last call.

        A long-running process counts every call as an activation; on the
        same day this is a no-op.
        """
        now = self.clock()
        if self._active and self.day_boundary.evaluate(self.state, now).clear_entries:
            self.reminder.evaluate(now, self.state.entries)
        return now

    def add_entry(self) -> TrackerView:
        now = self._check_day()
        just_reached_goal = self.ledger.add_entry(now)
        self.reminder.clear()
        return self._derive(just_reached_goal=just_reached_goal)

    def remove_last(self) -> TrackerView:
        now = self._check_day()
        self.ledger.remove_last()
        self.reminder.evaluate(now, self.state.entries)
        return self._derive()

    def remove_by_id(self, timestamp: int) -> TrackerView:
        now = self._check_day()
        self.ledger.remove_by_id(timestamp)
        self.reminder.evaluate(now, self.state.entries)
        return self._derive()

    def set_goal(self, requested: Any) -> TrackerView:
        self._check_day()
        self.goals.set_goal(requested)
        return self._derive()

    def clear_day(self) -> TrackerView:
        """Clear today's ledger. Callers must confirm with the user first."""
        now = self._check_day()
        self.ledger.clear()
        self.reminder.evaluate(now, self.state.entries)
        return self._derive()

    def check_reminder(self) -> bool:
        """Periodic tick: re-evaluate the overdue flag."""
        now = self._check_day()
        return self.reminder.evaluate(now, self.state.entries)

    def view(self) -> TrackerView:
        """Current display values, after any pending day rollover."""
        self._check_day()
        return self._derive()

    def _derive(self, just_reached_goal: bool = False) -> TrackerView:
        entries = self.state.entries
        count = len(entries)
        goal = self.state.goal
        pct = percent(count, goal)

        return TrackerView(
            count=count,
            goal=goal,
            percent=pct,
            remaining_label=remaining_label(count, goal),
            last_logged_display_time=entries[-1].display_time if entries else NO_ENTRY_TIME,
            streak_count=self.state.streak,
            overdue=self.reminder.overdue,
            just_reached_goal=just_reached_goal,
            today=self.state.last_active_day,
            water_color=water_color(pct),
            entries=list(entries),
        )
