"""Tests for goal clamping and progress derivation."""

import pytest

from water_tracker.intake.goal import (
    GoalTracker,
    clamp_goal,
    percent,
    remaining_label,
    water_color,
)
from water_tracker.intake.models import TrackerState


@pytest.mark.parametrize(
    "requested, expected",
    [
        (25, 20),
        (0, 1),
        (-4, 1),
        (1, 1),
        (20, 20),
        (8, 8),
        ("12", 12),
        (" 7 glasses", 7),
        ("7.5", 7),
        (7.9, 7),
        ("abc", 1),
        ("", 1),
        (None, 1),
        (True, 1),
    ],
)
def test_clamp_goal(requested, expected):
    assert clamp_goal(requested) == expected


@pytest.mark.parametrize("requested", list(range(-5, 30)) + ["abc", "99", None])
def test_clamp_goal_idempotent(requested):
    once = clamp_goal(requested)
    assert clamp_goal(once) == once


def test_percent_bounds_and_monotonic():
    for goal in range(1, 21):
        previous = 0
        for count in range(0, 45):
            value = percent(count, goal)
            assert 0 <= value <= 100
            assert value >= previous
            previous = value


def test_percent_values():
    assert percent(0, 8) == 0
    assert percent(4, 8) == 50
    assert percent(8, 8) == 100
    assert percent(12, 8) == 100
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(1, 8) == 13  # 12.5 rounds up


def test_remaining_label():
    assert remaining_label(3, 8) == "5 remaining"
    assert remaining_label(8, 8) == "Goal reached!"
    assert remaining_label(9, 8) == "Goal reached!"


def test_water_color_thresholds():
    assert water_color(0) == "#89f7fe"
    assert water_color(34) == "#00d2ff"
    assert water_color(67) == "#3a7bd5"
    assert water_color(100) == "#00fff0"


def test_set_goal_persists(store):
    state = TrackerState()
    tracker = GoalTracker(state, store)

    assert tracker.set_goal(25) == 20
    assert store.load().goal == 20

    assert tracker.set_goal(0) == 1
    assert state.goal == 1
    assert store.load().goal == 1
