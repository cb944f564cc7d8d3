from __future__ import annotations

from dataclasses import dataclass, field

from bigidle.bignum import BigCounter
from bigidle.clock import ManualClock
from bigidle.config import GameConfig
from bigidle.persistence import PersistenceAdapter
from bigidle.runtime import IdleGame
from bigidle.session import GameSession
from bigidle.state import GameState
from bigidle.store import MemoryStore, Store

MAX_SECONDS = 10_000_000


@dataclass(frozen=True)
class Snapshot:
    time: float
    counter: BigCounter
    production: BigCounter


@dataclass
class SimulationReport:
    """Container for the results of a headless run."""

    total_time: float = 0.0
    ticks: int = 0
    upgrades: int = 0
    saves: int = 0
    final_state: GameState | None = None
    snapshots: list[Snapshot] = field(default_factory=list)

    def digits_series(self) -> list[tuple[float, int, int]]:
        """Return (time, counter digits, production digits) per snapshot."""
        return [
            (s.time, s.counter.digit_count(), s.production.digit_count())
            for s in self.snapshots
        ]


class Simulation:
    """Runs a session on a manual clock, as fast as the CPU allows."""

    def __init__(
        self,
        config: GameConfig | None = None,
        seconds: float = 60,
        upgrade_every: float | None = None,
        start: GameState | None = None,
        store: Store | None = None,
    ) -> None:
        if seconds < 0 or seconds > MAX_SECONDS:
            raise ValueError(f"seconds must be within 0..{MAX_SECONDS}, got {seconds}")

        self.config = config or GameConfig()
        if upgrade_every is not None and upgrade_every * 1000 < self.config.tick_interval_ms:
            raise ValueError(
                "upgrade_every must be at least one tick interval "
                f"({self.config.tick_interval_ms} ms), got {upgrade_every}"
            )
        self.seconds = seconds
        self.upgrade_every = upgrade_every

        start_time = start.last_save if start is not None else 0
        self.clock = ManualClock(start_time)
        self.store = store if store is not None else MemoryStore()
        persistence = PersistenceAdapter(
            self.store, key=self.config.save_key, clock=self.clock.now_ms
        )
        game = IdleGame(start, persistence=persistence, clock=self.clock.now_ms)
        self.session = GameSession(game, self.clock, self.config)
        self._start_time = start_time

    def run(self) -> SimulationReport:
        report = SimulationReport()
        game = self.session.game
        last_saved_at = game.state.last_saved_at
        last_counter = game.state.counter

        def _observe(state: GameState) -> None:
            nonlocal last_saved_at, last_counter
            if state.last_saved_at != last_saved_at:
                report.saves += 1
                last_saved_at = state.last_saved_at
            if state.counter != last_counter:
                report.ticks += 1
                last_counter = state.counter
                report.snapshots.append(
                    Snapshot(
                        time=self._elapsed(),
                        counter=state.counter,
                        production=state.production,
                    )
                )

        unsubscribe = game.subscribe(_observe)
        self.session.start()
        try:
            tick_ms = self.config.tick_interval_ms
            n_ticks = round(self.seconds * 1000) // tick_ms
            upgrade_ms = None
            if self.upgrade_every is not None:
                upgrade_ms = round(self.upgrade_every * 1000)
            next_upgrade_ms = upgrade_ms
            for i in range(1, n_ticks + 1):
                self.clock.advance(tick_ms)
                elapsed_ms = i * tick_ms
                while next_upgrade_ms is not None and next_upgrade_ms <= elapsed_ms:
                    game.upgrade()
                    report.upgrades += 1
                    next_upgrade_ms += upgrade_ms
        finally:
            self.session.stop()
            unsubscribe()

        report.total_time = self._elapsed()
        report.final_state = game.state
        return report

    def _elapsed(self) -> float:
        return (self.clock.now_ms() - self._start_time) / 1000
