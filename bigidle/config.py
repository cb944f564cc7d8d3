from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from bigidle.persistence import SAVE_KEY

ENV_HOME = "BIGIDLE_HOME"


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Idle Game with Big Numbers"
    tick_interval_ms: int = 1000
    autosave_interval_ms: int = 5000
    save_key: str = SAVE_KEY
    save_dir: str | Path | None = None

    def resolve_save_dir(self) -> Path:
        """Explicit ``save_dir``, else ``$BIGIDLE_HOME``, else ``~/.bigidle``."""
        if self.save_dir is not None:
            return Path(self.save_dir)
        env = os.environ.get(ENV_HOME)
        if env:
            return Path(env)
        return Path.home() / ".bigidle"

    def validate(self) -> list[str]:
        """Check for configuration errors. Returns list of error messages."""
        errors: list[str] = []
        if self.tick_interval_ms <= 0:
            errors.append(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.autosave_interval_ms <= 0:
            errors.append(
                f"autosave_interval_ms must be positive, got {self.autosave_interval_ms}"
            )
        if not self.save_key:
            errors.append("save_key must not be empty")
        return errors
