"""Play for a minute, close the game for two hours, come back.

Run with: python examples/offline_session.py
"""
from __future__ import annotations

from bigidle.clock import ManualClock
from bigidle.config import GameConfig
from bigidle.formatting import format_status
from bigidle.session import GameSession
from bigidle.state import GameState
from bigidle.store import MemoryStore

START = 1_700_000_000_000
AWAY_MS = 2 * 3600 * 1000


def play_and_return(upgrades: int = 10) -> tuple[GameState, GameState]:
    """Return (state when the game was closed, state after reopening)."""
    store = MemoryStore()
    clock = ManualClock(START)
    config = GameConfig(name="Offline Example")

    session = GameSession.open(store, clock, config)
    session.start()
    for _ in range(upgrades):
        session.game.upgrade()
    clock.advance(60_000)
    closed = session.close()

    clock.set_time(clock.now_ms() + AWAY_MS)
    reopened = GameSession.open(store, clock, config)
    return closed, reopened.state


if __name__ == "__main__":
    closed, reopened = play_and_return()
    now = START + 60_000 + AWAY_MS
    print(format_status(closed, START + 60_000, title="Before closing"))
    print()
    print(format_status(reopened, now, title="After two hours away"))
