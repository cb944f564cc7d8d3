from __future__ import annotations

import logging
from typing import Callable

from bigidle.clock import now_ms
from bigidle.errors import StorageError
from bigidle.persistence import PersistenceAdapter
from bigidle.state import Action, GameState

logger = logging.getLogger(__name__)

Observer = Callable[[GameState], None]


def transition(
    state: GameState,
    action: Action,
    *,
    now: float,
    persistence: PersistenceAdapter | None = None,
) -> GameState:
    """Return the snapshot that follows *state* after *action*.

    Only SAVE and LOAD touch the outside world, and neither raises: a failed
    save or an empty/unreadable load yields *state* unchanged.
    """
    if action is Action.TICK:
        return state.ticked()

    if action is Action.UPGRADE_PRODUCTION:
        return state.upgraded()

    if action is Action.RESET:
        return GameState.fresh(now)

    if action is Action.SAVE:
        if persistence is None:
            logger.warning("Save error: no persistence configured")
            return state
        try:
            return persistence.save(state, now=now)
        except StorageError as e:
            logger.warning("Save error: %s", e)
            return state

    if action is Action.LOAD:
        if persistence is None:
            logger.warning("Load error: no persistence configured")
            return state
        loaded = persistence.load(now=now)
        return loaded if loaded is not None else state

    raise ValueError(f"Unknown action: {action!r}")


class IdleGame:
    """Holds the current snapshot and applies actions to it one at a time."""

    def __init__(
        self,
        state: GameState | None = None,
        persistence: PersistenceAdapter | None = None,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self.persistence = persistence
        self._clock = clock
        self.state = state if state is not None else GameState.fresh(clock())
        self._observers: list[Observer] = []

    @classmethod
    def restore(
        cls,
        persistence: PersistenceAdapter,
        clock: Callable[[], float] = now_ms,
    ) -> IdleGame:
        """Start from the saved game (with offline progress) or a fresh one."""
        now = clock()
        state = persistence.load(now=now)
        if state is None:
            state = GameState.fresh(now)
        return cls(state, persistence=persistence, clock=clock)

    # ── Core loop ────────────────────────────────────────────────────

    def dispatch(self, action: Action) -> GameState:
        new_state = transition(
            self.state, action, now=self._clock(), persistence=self.persistence
        )
        self.state = new_state
        errors: list[Exception] = []
        for observer in list(self._observers):
            try:
                observer(new_state)
            except Exception as e:
                errors.append(e)
        if errors:
            raise errors[0]
        return new_state

    # ── Player actions ───────────────────────────────────────────────

    def tick(self) -> GameState:
        return self.dispatch(Action.TICK)

    def upgrade(self) -> GameState:
        return self.dispatch(Action.UPGRADE_PRODUCTION)

    def save(self) -> GameState:
        return self.dispatch(Action.SAVE)

    def load(self) -> GameState:
        return self.dispatch(Action.LOAD)

    def reset(self) -> GameState:
        return self.dispatch(Action.RESET)

    # ── Observers ────────────────────────────────────────────────────

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call *observer* with every new snapshot. Returns an unsubscribe function.

        Every observer runs even if an earlier one raises; the first error is
        re-raised from :meth:`dispatch` after the new snapshot is installed.
        """
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def now(self) -> float:
        return self._clock()
