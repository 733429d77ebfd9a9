"""SQLite key/value persistence for tracker state."""

import json
import logging
import sqlite3
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .models import DEFAULT_GOAL, Entry, TrackerState

logger = logging.getLogger(__name__)

GOAL_KEY = "goal"
ENTRIES_KEY = "entries"
STREAK_KEY = "streak"
LAST_ACTIVE_DAY_KEY = "lastActiveDay"

_entries_adapter = TypeAdapter(list[Entry])


class IntakeStore:
    """Persists the four tracker fields as independent keys.

    Storage failures never reach the caller: the store logs them, marks
    itself unavailable and the session carries on in memory.
    """

    def __init__(self, db_path: str = "data/water.db", default_goal: int = DEFAULT_GOAL):
        """Initialize store."""
        self.db_path = Path(db_path)
        self.default_goal = default_goal
        self.available = True

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_db()
        except (sqlite3.Error, OSError) as e:
            self._mark_unavailable("initialize", e)

    def _init_db(self):
        """Create the state table if it doesn't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        logger.info(f"Store initialized at {self.db_path}")

    def _mark_unavailable(self, action: str, error: Exception):
        self.available = False
        logger.error(
            f"Could not {action} store at {self.db_path}: {error}. "
            "Continuing in memory for this session"
        )

    def load(self) -> TrackerState:
        """
        Load persisted state.

        Absent keys fall back to their defaults (goal, empty ledger, zero
        streak, no last active day). A corrupt entries payload is logged and
        replaced by an empty ledger.

        Returns:
            TrackerState as stored, without bounds checks
        """
        state = TrackerState(goal=self.default_goal)
        if not self.available:
            return state

        try:
            with sqlite3.connect(self.db_path) as conn:
                rows = dict(conn.execute("SELECT key, value FROM state").fetchall())
        except sqlite3.Error as e:
            self._mark_unavailable("read", e)
            return state

        if GOAL_KEY in rows:
            state.goal = self._parse_int(GOAL_KEY, rows[GOAL_KEY], self.default_goal)
        if ENTRIES_KEY in rows:
            state.entries = self._parse_entries(rows[ENTRIES_KEY])
        if STREAK_KEY in rows:
            state.streak = self._parse_int(STREAK_KEY, rows[STREAK_KEY], 0)
        if LAST_ACTIVE_DAY_KEY in rows:
            state.last_active_day = rows[LAST_ACTIVE_DAY_KEY]

        logger.debug(
            f"Loaded state: goal={state.goal}, entries={len(state.entries)}, "
            f"streak={state.streak}, last_active_day={state.last_active_day!r}"
        )
        return state

    def save(self, state: TrackerState):
        """Write all four fields in a single transaction."""
        if not self.available:
            logger.debug("Store unavailable, keeping state in memory only")
            return

        entries_payload = json.dumps(
            [entry.model_dump(by_alias=True) for entry in state.entries],
            separators=(",", ":"),
        )
        values = [
            (GOAL_KEY, str(state.goal)),
            (ENTRIES_KEY, entries_payload),
            (STREAK_KEY, str(state.streak)),
            (LAST_ACTIVE_DAY_KEY, state.last_active_day),
        ]

        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.executemany(
                    "INSERT OR REPLACE INTO state (key, value) VALUES (?, ?)", values
                )
                conn.commit()
        except sqlite3.Error as e:
            self._mark_unavailable("write", e)

    def _parse_entries(self, payload: str) -> list[Entry]:
        """Decode the entries payload, or an empty ledger if it is corrupt."""
        try:
            return _entries_adapter.validate_json(payload)
        except ValidationError as e:
            logger.warning(f"Corrupt entries payload, resetting ledger: {e}")
            return []

    def _parse_int(self, key: str, value: str, default: int) -> int:
        try:
            return int(value)
        except (ValueError, TypeError):
            logger.warning(f"Non-numeric {key} value {value!r}, using {default}")
            return default
