"""Data models for intake tracking."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_GOAL = 8


class Entry(BaseModel):
    """One logged glass of water.

    Serialized as ``{"time": ..., "date": ..., "timestamp": ...}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    display_time: str = Field(alias="time")
    calendar_day: str = Field(alias="date")
    timestamp: int  # epoch milliseconds, unique within the ledger


@dataclass
class TrackerState:
    """Everything persisted between sessions."""
    goal: int = DEFAULT_GOAL
    entries: list[Entry] = field(default_factory=list)
    streak: int = 0
    last_active_day: str = ""  # "" means no prior session


@dataclass
class DayTransition:
    """Outcome of comparing the last active day with today."""
    streak: int
    last_active_day: str
    clear_entries: bool = False
    changed: bool = False


class TrackerView(BaseModel):
    """Derived values consumed by the renderer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    count: int
    goal: int
    percent: int
    remaining_label: str
    last_logged_display_time: str
    streak_count: int
    overdue: bool = False
    just_reached_goal: bool = False
    today: str
    water_color: str
    entries: list[Entry] = []
