from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else None


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else None


@dataclass
class Settings:
    # Plies searched on Hard, the root move included (3 = root + two replies).
    hard_depth: int = int(os.getenv("CHESSTOE_HARD_DEPTH", 3))
    hard_time_limit_s: Optional[float] = _optional_float("CHESSTOE_HARD_TIME_LIMIT")
    # Pause before a Hard reply is returned by the API, purely cosmetic.
    think_delay_s: float = float(os.getenv("CHESSTOE_THINK_DELAY", 0.0))
    difficulty: str = os.getenv("CHESSTOE_DIFFICULTY", "medium")
    seed: Optional[int] = _optional_int("CHESSTOE_SEED")
    log_level: str = os.getenv("CHESSTOE_LOG_LEVEL", "INFO")

    def __post_init__(self):
        if self.hard_depth < 1:
            raise ValueError("CHESSTOE_HARD_DEPTH must be at least 1")
        if self.think_delay_s < 0:
            raise ValueError("CHESSTOE_THINK_DELAY must not be negative")
        if self.hard_time_limit_s is not None and self.hard_time_limit_s <= 0:
            raise ValueError("CHESSTOE_HARD_TIME_LIMIT must be positive")
        if self.difficulty not in ("easy", "medium", "hard"):
            raise ValueError("CHESSTOE_DIFFICULTY must be easy, medium or hard")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
