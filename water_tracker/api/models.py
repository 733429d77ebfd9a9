"""HTTP request models."""

from typing import Any

from pydantic import BaseModel


class GoalRequest(BaseModel):
    """Body for PUT /api/goal. Any value is accepted and clamped."""

    goal: Any = None


class ResetRequest(BaseModel):
    """Body for POST /api/day/reset."""

    confirm: bool = False
