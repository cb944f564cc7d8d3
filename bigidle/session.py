from __future__ import annotations

import logging

from bigidle.clock import Clock, Subscription
from bigidle.config import GameConfig
from bigidle.persistence import PersistenceAdapter
from bigidle.runtime import IdleGame
from bigidle.state import GameState
from bigidle.store import Store

logger = logging.getLogger(__name__)


class GameSession:
    """Application shell wiring an IdleGame to a clock.

    Owns the tick and autosave subscriptions; restarting them always cancels
    the previous pair first, so a reload never leaves two tickers running.
    """

    def __init__(
        self,
        game: IdleGame,
        clock: Clock,
        config: GameConfig | None = None,
    ) -> None:
        config = config or GameConfig()
        errors = config.validate()
        if errors:
            raise ValueError(
                "Invalid GameConfig:\n" + "\n".join(f"  - {e}" for e in errors)
            )
        self.game = game
        self.clock = clock
        self.config = config
        self._tick_sub: Subscription | None = None
        self._autosave_sub: Subscription | None = None

    @classmethod
    def open(cls, store: Store, clock: Clock, config: GameConfig | None = None) -> GameSession:
        """Restore the saved game from *store* (or start fresh) on *clock*."""
        config = config or GameConfig()
        persistence = PersistenceAdapter(store, key=config.save_key, clock=clock.now_ms)
        game = IdleGame.restore(persistence, clock=clock.now_ms)
        return cls(game, clock, config)

    @property
    def state(self) -> GameState:
        return self.game.state

    @property
    def running(self) -> bool:
        return self._tick_sub is not None and self._tick_sub.active

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin ticking and autosaving. Restarts cleanly if already running."""
        self.stop()
        self._tick_sub = self.clock.every(self.config.tick_interval_ms, self.game.tick)
        self._autosave_sub = self.clock.every(
            self.config.autosave_interval_ms, self.game.save
        )
        logger.debug(
            "Session started (tick=%sms, autosave=%sms)",
            self.config.tick_interval_ms,
            self.config.autosave_interval_ms,
        )

    def stop(self) -> None:
        for sub in (self._tick_sub, self._autosave_sub):
            if sub is not None:
                sub.cancel()
        self._tick_sub = None
        self._autosave_sub = None

    def restart(self) -> None:
        self.start()

    def reload(self) -> GameState:
        """Load the saved game, then recreate the periodic sources."""
        state = self.game.load()
        if self.running:
            self.restart()
        return state

    def close(self) -> GameState:
        """Stop the periodic sources and write a final save."""
        self.stop()
        return self.game.save()
