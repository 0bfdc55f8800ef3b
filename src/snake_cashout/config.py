"""Centralized tuning constants and variant presets for Snake Cashout."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, replace


class BonusPolicy(str, enum.Enum):
    """Instant multiplier jump rule applied when food is eaten."""

    COMBO = "combo"
    SPIKE = "spike"


FOOD_COLORS: tuple[str, ...] = (
    "#ff4d6d",
    "#ff9f1c",
    "#a855f7",
    "#3cf0ff",
    "#ff3cac",
)
SPIKE_FOOD_COLORS: tuple[str, ...] = (
    "#ffd23f",
    "#3cf0ff",
    "#ff5e5b",
)

FOOD_COLOR_MODES = ("random", "cycle")

VARIANT_ENV = "SNAKE_CASHOUT_VARIANT"
STARTING_BALANCE_ENV = "SNAKE_CASHOUT_STARTING_BALANCE"
LOG_LEVEL_ENV = "SNAKE_CASHOUT_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Every load-time knob of a variant: bankroll, grid, speed, growth and risk."""

    name: str = "combo"
    skin: str = "emerald"

    starting_balance: int = 1000
    min_bet: int = 10
    max_bet: int = 250

    grid_columns: int = 20
    grid_rows: int = 16

    base_speed_ms: float = 138.0
    speed_increase_ms: float = 3.0
    min_speed_ms: float = 52.0

    base_growth: float = 0.004
    food_bonus_factor: float = 0.08
    mult_cap: float = 10.0

    base_risk: float = 0.0028
    risk_exp: float = 1.5

    bonus_policy: BonusPolicy = BonusPolicy.COMBO
    combo_threshold: int = 3
    combo_bonus: float = 0.15
    spike_amount: float = 0.10

    food_count: int = 2
    food_spawn_attempts: int = 120
    food_colors: tuple[str, ...] = FOOD_COLORS
    food_color_mode: str = "random"

    def __post_init__(self) -> None:
        if self.starting_balance < 0:
            raise ValueError("starting_balance must be >= 0")
        if not 0 < self.min_bet <= self.max_bet:
            raise ValueError(
                f"bet limits must satisfy 0 < min_bet <= max_bet, "
                f"got {self.min_bet}..{self.max_bet}"
            )
        # The spawned snake trails two cells left of the centre column.
        if self.grid_columns < 4 or self.grid_rows < 1:
            raise ValueError("grid must be at least 4x1")
        if not 0 < self.min_speed_ms <= self.base_speed_ms:
            raise ValueError("min_speed_ms must be in (0, base_speed_ms]")
        if self.speed_increase_ms < 0:
            raise ValueError("speed_increase_ms must be >= 0")
        if self.base_growth < 0 or self.food_bonus_factor < 0:
            raise ValueError("growth parameters must be >= 0")
        if self.mult_cap < 1.0:
            raise ValueError("mult_cap must be >= 1.0")
        if self.base_risk < 0 or self.risk_exp < 0:
            raise ValueError("risk parameters must be >= 0")
        if self.combo_threshold < 1:
            raise ValueError("combo_threshold must be >= 1")
        if self.combo_bonus < 0 or self.spike_amount < 0:
            raise ValueError("bonus amounts must be >= 0")
        if self.food_count < 0 or self.food_spawn_attempts < 1:
            raise ValueError("food_count must be >= 0 and food_spawn_attempts >= 1")
        if not self.food_colors:
            raise ValueError("food_colors must not be empty")
        if self.food_color_mode not in FOOD_COLOR_MODES:
            raise ValueError(
                f"food_color_mode must be one of {FOOD_COLOR_MODES}, "
                f"got {self.food_color_mode!r}"
            )
        # Accept plain strings for the policy (e.g. from overrides).
        object.__setattr__(self, "bonus_policy", BonusPolicy(self.bonus_policy))


COMBO_VARIANT = GameConfig()

SPIKE_VARIANT = GameConfig(
    name="spike",
    skin="ember",
    base_risk=0.0026,
    bonus_policy=BonusPolicy.SPIKE,
    food_colors=SPIKE_FOOD_COLORS,
    food_color_mode="cycle",
)

VARIANTS: dict[str, GameConfig] = {
    COMBO_VARIANT.name: COMBO_VARIANT,
    SPIKE_VARIANT.name: SPIKE_VARIANT,
}


def load_config(variant: str | None = None) -> GameConfig:
    """Resolve a variant preset, honoring environment overrides."""
    name = (variant or os.getenv(VARIANT_ENV) or COMBO_VARIANT.name).strip().lower()
    config = VARIANTS.get(name)
    if config is None:
        available = ", ".join(sorted(VARIANTS))
        raise ValueError(f"Unknown variant: {name!r}. Available: {available}")

    raw_balance = os.getenv(STARTING_BALANCE_ENV)
    if raw_balance:
        try:
            balance = int(raw_balance)
        except ValueError:
            raise ValueError(
                f"{STARTING_BALANCE_ENV} must be an integer, got {raw_balance!r}"
            ) from None
        config = replace(config, starting_balance=balance)
    return config
