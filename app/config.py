from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_FIRST_TURN_DELAY_MS = 500


@dataclass(frozen=True, slots=True)
class EngineSettings:
    # Pause before the starting symbol is revealed.
    first_turn_delay_ms: int = DEFAULT_FIRST_TURN_DELAY_MS
    # Fixed RNG seed for reproducible games; None draws a fresh seed.
    seed: int | None = None
    log_level: str = "INFO"

    @property
    def first_turn_delay(self) -> float:
        return self.first_turn_delay_ms / 1000.0


def _int_from_env(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from e


def settings_from_env() -> EngineSettings:
    delay = _int_from_env("TICTACTOE_FIRST_TURN_DELAY_MS")
    if delay is None:
        delay = DEFAULT_FIRST_TURN_DELAY_MS
    if delay < 0:
        raise RuntimeError(f"TICTACTOE_FIRST_TURN_DELAY_MS must be >= 0, got {delay}")

    return EngineSettings(
        first_turn_delay_ms=delay,
        seed=_int_from_env("TICTACTOE_SEED"),
        log_level=os.environ.get("TICTACTOE_LOG_LEVEL", "INFO").upper(),
    )
