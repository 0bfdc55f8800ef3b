"""Multiplier growth, per-tick crash odds, and food bonus jumps.

Growth per tick::

    growth = base_growth * (1 + food_eaten * food_bonus_factor)
    multiplier = min(mult_cap, multiplier + growth)

Crash odds per tick, evaluated on the already-grown multiplier::

    p = base_risk * multiplier ** risk_exp

With the default combo tuning that is about 0.28% per tick at 1x, 1.45% at
3x and 3.1% at 5x.
"""

from __future__ import annotations

import enum
import math
import random

from .config import BonusPolicy, GameConfig


class BonusKind(str, enum.Enum):
    COMBO = "combo"
    SPIKE = "spike"


def payout(bet: int, multiplier: float) -> int:
    """Cash-out amount; always floored, never rounded."""
    return math.floor(bet * multiplier)


class RiskEngine:
    """Owns the multiplier and its bonus counters for one round at a time."""

    def __init__(self, config: GameConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self.rng = rng or random.Random()
        self.reset()

    def reset(self) -> None:
        self.multiplier: float = 1.0
        self.food_eaten: int = 0
        self.streak: int = 0
        self.bonus_count: int = 0

    @property
    def growth_rate(self) -> float:
        cfg = self.config
        return cfg.base_growth * (1 + self.food_eaten * cfg.food_bonus_factor)

    @property
    def crash_probability(self) -> float:
        return self.config.base_risk * self.multiplier**self.config.risk_exp

    def grow(self) -> float:
        self.multiplier = min(self.config.mult_cap, self.multiplier + self.growth_rate)
        return self.multiplier

    def roll_crash(self) -> bool:
        """One independent Bernoulli trial at the current multiplier."""
        return self.rng.random() < self.crash_probability

    def register_food(self) -> BonusKind | None:
        """Count a food item and apply the configured jump, if it fires."""
        self.food_eaten += 1
        cfg = self.config
        if cfg.bonus_policy is BonusPolicy.SPIKE:
            self._jump(cfg.spike_amount)
            return BonusKind.SPIKE

        self.streak += 1
        if self.streak >= cfg.combo_threshold:
            self.streak = 0
            self._jump(cfg.combo_bonus)
            return BonusKind.COMBO
        return None

    def bonus_amount(self, kind: BonusKind) -> float:
        if kind is BonusKind.SPIKE:
            return self.config.spike_amount
        return self.config.combo_bonus

    def _jump(self, amount: float) -> None:
        self.bonus_count += 1
        self.multiplier = min(self.config.mult_cap, self.multiplier + amount)
