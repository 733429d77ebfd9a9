"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta

from fastapi import FastAPI, HTTPException

from .api.models import GoalRequest, ResetRequest
from .config import settings
from .intake.models import TrackerView
from .intake.reminder import ReminderTicker
from .intake.store import IntakeStore
from .intake.tracker import WaterTracker

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_tracker() -> WaterTracker:
    """Build the session tracker from settings."""
    store = IntakeStore(settings.db_path, default_goal=settings.default_goal)
    return WaterTracker(
        store,
        reminder_delay=timedelta(minutes=settings.reminder_delay_minutes),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Activate the tracker and run the reminder check while serving."""
    tracker: WaterTracker = app.state.tracker
    tracker.activate()

    ticker = ReminderTicker(tracker.check_reminder, settings.reminder_check_interval)
    ticker.start()
    try:
        yield
    finally:
        await ticker.stop()


# Initialize FastAPI app
app = FastAPI(
    title="Water Tracker",
    description="Daily water intake tracker with goal and streak",
    version=VERSION,
    lifespan=lifespan,
)
app.state.tracker = create_tracker()


def get_tracker() -> WaterTracker:
    return app.state.tracker


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Water Tracker",
        "version": VERSION,
        "endpoints": {
            "state": "/api/state",
            "entries": "/api/entries",
            "goal": "/api/goal",
            "reset": "/api/day/reset",
            "status": "/status",
        },
    }


@app.get("/status")
async def status():
    """Server status endpoint."""
    tracker = get_tracker()
    return {
        "status": "running",
        "version": VERSION,
        "timestamp": datetime.now().isoformat(),
        "today": tracker.state.last_active_day,
        "storage_available": tracker.store.available,
    }


@app.get("/api/state", response_model=TrackerView)
async def state_endpoint():
    """Current derived values for rendering."""
    return get_tracker().view()


@app.post("/api/entries", response_model=TrackerView)
async def add_entry_endpoint():
    """Log one glass."""
    return get_tracker().add_entry()


@app.delete("/api/entries/last", response_model=TrackerView)
async def remove_last_endpoint():
    """Undo the most recent glass."""
    return get_tracker().remove_last()


@app.delete("/api/entries/{timestamp}", response_model=TrackerView)
async def remove_entry_endpoint(timestamp: int):
    """
    Remove a specific glass.

    Removing a glass that is already gone is not an error.
    """
    return get_tracker().remove_by_id(timestamp)


@app.put("/api/goal", response_model=TrackerView)
async def set_goal_endpoint(body: GoalRequest):
    """Set the daily goal (clamped to 1-20)."""
    return get_tracker().set_goal(body.goal)


@app.post("/api/day/reset", response_model=TrackerView)
async def reset_day_endpoint(body: ResetRequest = ResetRequest()):
    """
    Clear today's log.

    Requires ``{"confirm": true}`` so a stray request cannot wipe the day.
    """
    if not body.confirm:
        raise HTTPException(status_code=409, detail="Reset not confirmed")

    logger.info("Manual day reset")
    return get_tracker().clear_day()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
