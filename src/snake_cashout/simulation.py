"""Monte Carlo RTP measurement for Snake Cashout variants.

Plays headless rounds through a real :class:`Session` with a greedy
autopilot and a fixed auto-cash-out target, and reports the measured return
to player.

Usage::

    snake-cashout-sim --rounds 20000 --cashout-at 2.0 --variant combo
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import random
from dataclasses import asdict, dataclass, field

from .config import LOG_LEVEL_ENV, VARIANTS, GameConfig, load_config
from .grid import Cell, Grid
from .session import CashedOut, Crashed, CrashCause, RoundState, Session, Snapshot
from .snake import DIRECTIONS, Direction, opposite

logger = logging.getLogger(__name__)

TICK_MS: float = 1000.0 / 60.0
# Hard stop for a round that neither crashes nor reaches its target.
MAX_TICKS_PER_ROUND: int = 100_000


@dataclass
class SimResult:
    """Aggregate results of a batch of simulated rounds."""

    variant: str
    rounds: int
    bet: int
    cashout_at: float
    total_wagered: int = 0
    total_returned: int = 0
    cashouts: int = 0
    risk_crashes: int = 0
    collisions: int = 0
    food_eaten: int = 0
    crash_multiplier_sum: float = 0.0
    distribution: dict = field(default_factory=dict)
    crash_distribution: dict = field(default_factory=dict)

    @property
    def rtp(self) -> float:
        return self.total_returned / self.total_wagered if self.total_wagered else 0.0

    @property
    def hit_rate(self) -> float:
        return self.cashouts / self.rounds if self.rounds else 0.0

    @property
    def avg_crash_multiplier(self) -> float:
        losses = self.risk_crashes + self.collisions
        return self.crash_multiplier_sum / losses if losses else 0.0

    @property
    def avg_food(self) -> float:
        return self.food_eaten / self.rounds if self.rounds else 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        shares = {}
        if self.rounds:
            shares = {k: round(v / self.rounds, 4) for k, v in self.distribution.items()}
        data.update(
            rtp=round(self.rtp, 4),
            hit_rate=round(self.hit_rate, 4),
            avg_crash_multiplier=round(self.avg_crash_multiplier, 4),
            avg_food=round(self.avg_food, 4),
            crash_multiplier_sum=round(self.crash_multiplier_sum, 4),
            distribution=shares,
        )
        return data

    def summary(self) -> str:
        lines = [
            f"Variant {self.variant}: {self.rounds:,} rounds, bet {self.bet}, "
            f"cash out at {self.cashout_at:.2f}x",
            f"  RTP            {self.rtp:.2%}",
            f"  Hit rate       {self.hit_rate:.2%}",
            f"  Risk crashes   {self.risk_crashes:,}",
            f"  Collisions     {self.collisions:,}",
            f"  Avg crash at   {self.avg_crash_multiplier:.2f}x",
            f"  Avg food       {self.avg_food:.2f}",
        ]
        for bucket, count in self.distribution.items():
            lines.append(f"  {bucket:<14} {count / self.rounds:.2%}")
        return "\n".join(lines)


def bucket_for(multiplier: float) -> str:
    if multiplier < 2:
        return "1-2x"
    if multiplier < 5:
        return "2-5x"
    return "5-10x"


def _is_safe(grid: Grid, body: tuple[Cell, ...], cell: Cell) -> bool:
    return grid.is_inside(cell) and cell not in body


def choose_direction(grid: Grid, snap: Snapshot) -> Direction:
    """Greedy steering: the safe direction closest to the nearest food."""
    head = snap.snake[0]
    targets = [item.cell for item in snap.food]
    best: Direction = snap.direction
    best_key: tuple[int, int] | None = None
    for direction in DIRECTIONS.values():
        if direction == opposite(snap.direction):
            continue
        cell = (head[0] + direction[0], head[1] + direction[1])
        if not _is_safe(grid, snap.snake, cell):
            continue
        distance = min(
            (abs(cell[0] - tx) + abs(cell[1] - ty) for tx, ty in targets),
            default=0,
        )
        # Prefer keeping the current heading on ties.
        key = (distance, 0 if direction == snap.direction else 1)
        if best_key is None or key < best_key:
            best, best_key = direction, key
    return best


def simulate(
    config: GameConfig,
    rounds: int = 10_000,
    *,
    cashout_at: float = 2.0,
    bet: int | None = None,
    seed: int = 42,
    tick_ms: float = TICK_MS,
) -> SimResult:
    """Run ``rounds`` autopiloted rounds and measure the return to player."""
    stake = config.min_bet if bet is None else bet
    session = Session(
        config,
        crash_rng=random.Random(seed),
        food_rng=random.Random(seed + 1),
    )
    result = SimResult(
        variant=config.name, rounds=rounds, bet=stake, cashout_at=cashout_at
    )

    def record(event) -> None:
        if isinstance(event, CashedOut):
            result.cashouts += 1
            result.total_returned += event.payout
            key = bucket_for(event.multiplier)
        elif isinstance(event, Crashed):
            if event.cause is CrashCause.RISK:
                result.risk_crashes += 1
            else:
                result.collisions += 1
            result.crash_multiplier_sum += event.multiplier
            crash_key = bucket_for(event.multiplier)
            result.crash_distribution[crash_key] = (
                result.crash_distribution.get(crash_key, 0) + 1
            )
            key = "0x"
        else:
            return
        result.distribution[key] = result.distribution.get(key, 0) + 1

    session.subscribe(record)

    for _ in range(rounds):
        if session.balance < stake:
            session.reset_balance()
        if not session.start(stake):
            raise ValueError(f"bet {stake} is not playable under variant {config.name}")
        result.total_wagered += stake

        ticks = 0
        while session.state is RoundState.RUNNING:
            if session.multiplier >= cashout_at or ticks >= MAX_TICKS_PER_ROUND:
                session.cash_out()
                break
            snap = session.snapshot()
            session.set_direction(*choose_direction(session.grid, snap))
            session.tick(tick_ms)
            ticks += 1
        result.food_eaten += session.risk.food_eaten

    result.distribution = dict(sorted(result.distribution.items()))
    result.crash_distribution = dict(sorted(result.crash_distribution.items()))
    logger.info(
        "Simulated %d rounds of %s: RTP %.4f", rounds, config.name, result.rtp
    )
    return result


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Measure Snake Cashout RTP")
    parser.add_argument("--variant", choices=sorted(VARIANTS), default=None)
    parser.add_argument("--rounds", type=int, default=10_000)
    parser.add_argument("--cashout-at", type=float, default=2.0)
    parser.add_argument("--bet", type=int, default=None)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--json", action="store_true", help="Print JSON instead")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.variant)
    result = simulate(
        config,
        args.rounds,
        cashout_at=args.cashout_at,
        bet=args.bet,
        seed=args.seed,
    )
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.summary())


if __name__ == "__main__":
    main()
