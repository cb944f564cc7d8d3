from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from bigidle.bignum import BigCounter


class Action(Enum):
    TICK = auto()
    UPGRADE_PRODUCTION = auto()
    SAVE = auto()
    LOAD = auto()
    RESET = auto()


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the game.

    Timestamps are wall-clock milliseconds since the epoch. ``last_save`` is
    the baseline for offline progress; ``last_saved_at`` is only displayed.
    """

    counter: BigCounter
    production: BigCounter
    last_save: float
    last_saved_at: float | None = None

    def __post_init__(self) -> None:
        if self.production.value < 1:
            raise ValueError(f"Production must be at least 1, got {self.production}")

    @classmethod
    def fresh(cls, now: float) -> GameState:
        return cls(
            counter=BigCounter.zero(),
            production=BigCounter.one(),
            last_save=now,
            last_saved_at=None,
        )

    def ticked(self) -> GameState:
        return replace(self, counter=self.counter + self.production)

    def upgraded(self) -> GameState:
        return replace(self, production=self.production.scale(2))

    def stamped(self, now: float) -> GameState:
        """Copy marked as saved at *now*; ``last_save`` never moves backwards."""
        return replace(self, last_save=max(self.last_save, now), last_saved_at=now)
