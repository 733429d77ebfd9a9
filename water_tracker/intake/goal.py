"""Daily goal and progress derivation."""

import logging
import re
from typing import Any

from .models import TrackerState

logger = logging.getLogger(__name__)

MIN_GOAL = 1
MAX_GOAL = 20

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clamp_goal(requested: Any) -> int:
    """
    Turn any requested goal into a valid one.

    Text is read up to the first non-digit ("7.5" -> 7), anything
    unreadable becomes the minimum, and the result is clamped into
    [MIN_GOAL, MAX_GOAL].

    Example:
        clamp_goal(25) -> 20, clamp_goal("0") -> 1, clamp_goal(None) -> 1
    """
    if isinstance(requested, bool):
        value = None
    elif isinstance(requested, int):
        value = requested
    else:
        match = _LEADING_INT.match(str(requested))
        value = int(match.group(1)) if match else None

    if value is None or value < MIN_GOAL:
        return MIN_GOAL
    if value > MAX_GOAL:
        return MAX_GOAL
    return value


def percent(count: int, goal: int) -> int:
    """Completion percentage, rounded half up and capped at 100."""
    # floor(100 * count / goal + 0.5) without float error
    return min(100, (200 * count + goal) // (2 * goal))


def remaining_label(count: int, goal: int) -> str:
    if count >= goal:
        return "Goal reached!"
    return f"{goal - count} remaining"


def water_color(pct: int) -> str:
    """Fill color for a completion percentage."""
    if pct >= 100:
        return "#00fff0"
    if pct >= 67:
        return "#3a7bd5"
    if pct >= 34:
        return "#00d2ff"
    return "#89f7fe"


class GoalTracker:
    """Holds the daily goal on the shared state."""

    def __init__(self, state: TrackerState, store):
        """Initialize with shared state and store."""
        self.state = state
        self.store = store

    @property
    def goal(self) -> int:
        return self.state.goal

    def set_goal(self, requested: Any) -> int:
        """
        Clamp, store and persist a new goal.

        Args:
            requested: Raw user input (int, numeric text or junk)

        Returns:
            The goal actually stored
        """
        goal = clamp_goal(requested)
        if goal != requested:
            logger.info(f"Goal input {requested!r} clamped to {goal}")

        self.state.goal = goal
        self.store.save(self.state)
        logger.info(f"Goal set to {goal} ({self.percent()}% complete)")
        return goal

    def percent(self) -> int:
        return percent(len(self.state.entries), self.state.goal)
