from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable

from bigidle.bignum import BigCounter
from bigidle.clock import now_ms
from bigidle.errors import ParseError, StorageError
from bigidle.state import GameState
from bigidle.store import Store

logger = logging.getLogger(__name__)

SAVE_KEY = "idle_game_save"


def encode_state(state: GameState) -> str:
    """Serialize a state to JSON; big numbers are written as decimal strings."""
    data = {
        "counter": state.counter.to_decimal_string(),
        "production": state.production.to_decimal_string(),
        "last_save": state.last_save,
        "last_saved_at": state.last_saved_at,
    }
    return json.dumps(data)


def _timestamp(data: dict[str, Any], key: str, optional: bool = False) -> float | None:
    value = data.get(key)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StorageError(f"Field {key!r} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise StorageError(f"Field {key!r} must be finite, got {value!r}")
    return value


def decode_state(blob: str) -> GameState:
    """Parse a blob written by ``encode_state``.

    Raises ParseError for a malformed decimal field and StorageError for
    anything else wrong with the blob.
    """
    try:
        data = json.loads(blob)
    except ValueError as e:
        raise StorageError(f"Save is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise StorageError(f"Save must be a JSON object, got {type(data).__name__}")

    counter = BigCounter.from_decimal(data.get("counter"))
    production = BigCounter.from_decimal(data.get("production"))
    last_save = _timestamp(data, "last_save")
    last_saved_at = _timestamp(data, "last_saved_at", optional=True)

    try:
        return GameState(
            counter=counter,
            production=production,
            last_save=last_save,
            last_saved_at=last_saved_at,
        )
    except ValueError as e:
        raise StorageError(str(e)) from e


def apply_offline_progress(state: GameState, now: float) -> GameState:
    """Credit whole seconds elapsed since ``last_save`` and rebase it to *now*."""
    elapsed_seconds = max(0, int((now - state.last_save) // 1000))
    counter = state.counter
    if elapsed_seconds > 0:
        counter = counter + state.production.scale(elapsed_seconds)
    return GameState(
        counter=counter,
        production=state.production,
        last_save=now,
        last_saved_at=state.last_saved_at,
    )


class PersistenceAdapter:
    """Saves and restores GameState through a Store under a fixed key."""

    def __init__(
        self,
        store: Store,
        key: str = SAVE_KEY,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self.store = store
        self.key = key
        self._clock = clock

    def now(self) -> float:
        return self._clock()

    def save(self, state: GameState, now: float | None = None) -> GameState:
        """Write *state* stamped with the save time and return the stamped copy.

        Raises StorageError if the store rejects the write.
        """
        if now is None:
            now = self.now()
        stamped = state.stamped(now)
        self.store.set(self.key, encode_state(stamped))
        logger.debug("Saved game under %r at %s", self.key, now)
        return stamped

    def load(self, now: float | None = None) -> GameState | None:
        """Read the saved state with offline progress applied.

        Returns None when nothing is saved or the save is unusable; the
        latter is logged.
        """
        if now is None:
            now = self.now()
        try:
            blob = self.store.get(self.key)
        except StorageError as e:
            logger.warning("Load error: %s", e)
            return None
        if blob is None:
            logger.debug("No saved game under %r", self.key)
            return None

        try:
            stored = decode_state(blob)
        except (ParseError, StorageError) as e:
            logger.warning("Ignoring unreadable save %r: %s", self.key, e)
            return None

        return apply_offline_progress(stored, now)

    def clear(self) -> None:
        self.store.delete(self.key)


def format_last_saved(state: GameState, now: float) -> str:
    """Describe how long ago the state was last saved."""
    if state.last_saved_at is None:
        return "Never"
    seconds_ago = (now - state.last_saved_at) / 1000
    if seconds_ago < 60:
        return "Just now"
    if seconds_ago < 3600:
        return f"{seconds_ago / 60:.0f} minutes ago"
    return f"{seconds_ago / 3600:.1f} hours ago"
