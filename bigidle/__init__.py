# bigidle: idle game engine with arbitrary-precision counters

from bigidle.errors import ParseError, StorageError
from bigidle.bignum import BigCounter
from bigidle.state import Action, GameState
from bigidle.formatting import SUFFIXES, format_number, format_status
from bigidle.store import Store, MemoryStore, FileStore
from bigidle.persistence import (
    SAVE_KEY,
    PersistenceAdapter,
    apply_offline_progress,
    decode_state,
    encode_state,
    format_last_saved,
)
from bigidle.runtime import IdleGame, transition
from bigidle.clock import Clock, ManualClock, Subscription, SystemClock, now_ms
from bigidle.config import GameConfig
from bigidle.session import GameSession
from bigidle.simulation import Simulation, SimulationReport, Snapshot

__all__ = [
    # Errors
    "ParseError",
    "StorageError",
    # Numbers
    "BigCounter",
    "SUFFIXES",
    "format_number",
    "format_status",
    # State
    "Action",
    "GameState",
    # Storage
    "Store",
    "MemoryStore",
    "FileStore",
    # Persistence
    "SAVE_KEY",
    "PersistenceAdapter",
    "apply_offline_progress",
    "decode_state",
    "encode_state",
    "format_last_saved",
    # Runtime
    "IdleGame",
    "transition",
    # Clock
    "Clock",
    "ManualClock",
    "Subscription",
    "SystemClock",
    "now_ms",
    # Session
    "GameConfig",
    "GameSession",
    # Simulation
    "Simulation",
    "SimulationReport",
    "Snapshot",
]
