"""MCP server wrapping IdleGame for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from bigidle.bignum import BigCounter
from bigidle.config import GameConfig
from bigidle.formatting import format_number
from bigidle.persistence import format_last_saved
from bigidle.runtime import IdleGame

# Maximum ticks per tick() call (24 hours at one tick per second)
_MAX_TICKS = 86400
# Maximum upgrades per upgrade() call
_MAX_UPGRADES = 1000


@dataclass
class _GameHolder:
    """Holds the configuration and the live game."""

    config: GameConfig
    game: IdleGame


def _number(n: BigCounter) -> dict[str, str]:
    return {"value": n.to_decimal_string(), "display": format_number(n)}


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_state(holder: _GameHolder) -> dict[str, Any]:
    state = holder.game.state
    return {
        "name": holder.config.name,
        "counter": _number(state.counter),
        "production": _number(state.production),
        "last_save": state.last_save,
        "last_saved_at": state.last_saved_at,
        "last_saved": format_last_saved(state, holder.game.now()),
    }


def _tool_tick(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_TICKS:
        return {"error": f"Count cannot exceed {_MAX_TICKS}"}

    before = holder.game.state.counter
    for _ in range(count):
        holder.game.tick()
    after = holder.game.state.counter
    return {
        "ticks": count,
        "earned": _number(BigCounter(after.value - before.value)),
        "counter": _number(after),
    }


def _tool_upgrade(holder: _GameHolder, times: int = 1) -> dict[str, Any]:
    if times < 1:
        return {"error": "Times must be at least 1"}
    if times > _MAX_UPGRADES:
        return {"error": f"Times cannot exceed {_MAX_UPGRADES}"}

    for _ in range(times):
        holder.game.upgrade()
    return {
        "upgrades": times,
        "production": _number(holder.game.state.production),
    }


def _tool_save(holder: _GameHolder) -> dict[str, Any]:
    if holder.game.persistence is None:
        return {"success": False, "reason": "No persistence configured"}
    before = holder.game.state
    state = holder.game.save()
    if state is before:
        return {"success": False, "reason": "Save failed (see server log)"}
    return {"success": True, "last_saved_at": state.last_saved_at}


def _tool_load(holder: _GameHolder) -> dict[str, Any]:
    before = holder.game.state
    state = holder.game.load()
    if state is before:
        return {"success": False, "reason": "No usable save found"}
    return {
        "success": True,
        "counter": _number(state.counter),
        "production": _number(state.production),
    }


def _tool_reset(holder: _GameHolder) -> dict[str, Any]:
    holder.game.reset()
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(game: IdleGame, config: GameConfig | None = None) -> FastMCP:
    """Create an MCP server wrapping the given game."""
    holder = _GameHolder(config=config or GameConfig(), game=game)

    mcp = FastMCP(
        name=f"bigidle: {holder.config.name}",
    )

    @mcp.tool()
    def get_state() -> dict[str, Any]:
        """Get the current snapshot: counter, production, save timestamps."""
        return _tool_get_state(holder)

    @mcp.tool()
    def tick(count: int = 1) -> dict[str, Any]:
        """Advance the game by N ticks (max 86400). Each tick adds production to the counter."""
        return _tool_tick(holder, count)

    @mcp.tool()
    def upgrade(times: int = 1) -> dict[str, Any]:
        """Double production N times (max 1000)."""
        return _tool_upgrade(holder, times)

    @mcp.tool()
    def save() -> dict[str, Any]:
        """Save the game to the durable store."""
        return _tool_save(holder)

    @mcp.tool()
    def load() -> dict[str, Any]:
        """Load the saved game, crediting offline progress."""
        return _tool_load(holder)

    @mcp.tool()
    def reset() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_reset(holder)

    return mcp
