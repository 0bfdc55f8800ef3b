"""Round state machine: bets, ticks, crashes and cash-outs for one player session."""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Callable

from .config import GameConfig
from .food import Food, FoodManager
from .grid import Cell, Grid
from .risk import BonusKind, RiskEngine, payout
from .snake import Direction, Snake, StepOutcome

logger = logging.getLogger(__name__)


class RoundState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    CRASHED = "crashed"
    CASHED_OUT = "cashed_out"


class CrashCause(str, enum.Enum):
    RISK = "risk"
    WALL = "wall"
    SELF = "self"


class Rejection(str, enum.Enum):
    BET_NOT_INTEGER = "bet must be a whole number"
    BET_OUT_OF_RANGE = "bet outside the table limits"
    INSUFFICIENT_BALANCE = "bet exceeds balance"
    ROUND_IN_PROGRESS = "a round is already running"
    NOT_RUNNING = "no round is running"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a player command; falsy when the command was rejected."""

    ok: bool
    reason: Rejection | None = None

    def __bool__(self) -> bool:
        return self.ok


ACCEPTED = CommandResult(True)


# --- Events -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RoundStarted:
    bet: int
    balance: int


@dataclass(frozen=True, slots=True)
class FoodEaten:
    cell: Cell
    color: str
    food_eaten: int
    score: int


@dataclass(frozen=True, slots=True)
class BonusTriggered:
    kind: BonusKind
    amount: float
    multiplier: float


@dataclass(frozen=True, slots=True)
class Crashed:
    multiplier: float
    cause: CrashCause
    bet: int


@dataclass(frozen=True, slots=True)
class CashedOut:
    payout: int
    profit: int
    multiplier: float


@dataclass(frozen=True, slots=True)
class BalanceReset:
    balance: int


GameEvent = RoundStarted | FoodEaten | BonusTriggered | Crashed | CashedOut | BalanceReset
Listener = Callable[[GameEvent], object]


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the session for renderers and HUDs."""

    state: RoundState
    multiplier: float
    balance: int
    bet: int
    score: int
    best_score: int
    food_eaten: int
    streak: int
    bonus_count: int
    step_interval_ms: float
    crash_probability: float
    direction: Direction
    snake: tuple[Cell, ...]
    food: tuple[Food, ...]
    last_payout: int | None
    last_profit: int | None
    crash_cause: CrashCause | None


class Session:
    """Bankroll plus the current round; the only owner of mutable game state.

    ``crash_rng`` and ``food_rng`` are independent so crash ticks and food
    cells can be seeded separately.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        crash_rng: random.Random | None = None,
        food_rng: random.Random | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.grid = Grid(self.config.grid_columns, self.config.grid_rows)
        self.risk = RiskEngine(self.config, crash_rng)
        self.food_manager = FoodManager(
            self.grid,
            self.config.food_colors,
            count=self.config.food_count,
            max_attempts=self.config.food_spawn_attempts,
            color_mode=self.config.food_color_mode,
            rng=food_rng,
        )
        self._listeners: list[Listener] = []

        self.balance: int = self.config.starting_balance
        self.best_score: int = 0
        self.state: RoundState = RoundState.IDLE

        self.bet: int = 0
        self.score: int = 0
        self.step_interval_ms: float = self.config.base_speed_ms
        self._step_accumulator: float = 0.0
        self.snake: Snake = Snake.spawn(self.grid)
        self.food: list[Food] = []
        self.last_payout: int | None = None
        self.last_profit: int | None = None
        self.crash_cause: CrashCause | None = None

    # --- Observers ------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register an event listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # --- Queries --------------------------------------------------------

    @property
    def multiplier(self) -> float:
        return self.risk.multiplier

    @property
    def is_ticking(self) -> bool:
        """Whether the tick source should be feeding ``tick`` right now."""
        return self.state is RoundState.RUNNING

    def snapshot(self) -> Snapshot:
        return Snapshot(
            state=self.state,
            multiplier=self.risk.multiplier,
            balance=self.balance,
            bet=self.bet,
            score=self.score,
            best_score=self.best_score,
            food_eaten=self.risk.food_eaten,
            streak=self.risk.streak,
            bonus_count=self.risk.bonus_count,
            step_interval_ms=self.step_interval_ms,
            crash_probability=self.risk.crash_probability,
            direction=self.snake.direction,
            snake=tuple(self.snake.body),
            food=tuple(self.food),
            last_payout=self.last_payout,
            last_profit=self.last_profit,
            crash_cause=self.crash_cause,
        )

    # --- Commands -------------------------------------------------------

    def start(self, bet: int) -> CommandResult:
        """Place ``bet`` and begin a fresh round."""
        rejection = self._validate_bet(bet)
        if rejection is not None:
            logger.debug("Start rejected (bet=%r): %s", bet, rejection.value)
            return CommandResult(False, rejection)

        self.bet = bet
        self.balance -= bet
        self.score = 0
        self.risk.reset()
        self.step_interval_ms = self.config.base_speed_ms
        self._step_accumulator = 0.0
        self.last_payout = None
        self.last_profit = None
        self.crash_cause = None

        self.snake = Snake.spawn(self.grid)
        self.food_manager.reset()
        self.food = self.food_manager.replenish(self.snake.body, [])
        self.state = RoundState.RUNNING

        logger.info("Round started: bet=%d balance=%d", bet, self.balance)
        self._emit(RoundStarted(bet=bet, balance=self.balance))
        return ACCEPTED

    def _validate_bet(self, bet: object) -> Rejection | None:
        if self.state is RoundState.RUNNING:
            return Rejection.ROUND_IN_PROGRESS
        if isinstance(bet, bool) or not isinstance(bet, int):
            return Rejection.BET_NOT_INTEGER
        if not self.config.min_bet <= bet <= self.config.max_bet:
            return Rejection.BET_OUT_OF_RANGE
        if bet > self.balance:
            return Rejection.INSUFFICIENT_BALANCE
        return None

    def set_direction(self, dx: int, dy: int) -> None:
        """Queue a turn for the next step; silently ignored outside a round."""
        if self.state is not RoundState.RUNNING:
            return
        self.snake.set_pending_direction((dx, dy))

    def cash_out(self) -> CommandResult:
        """Lock in ``floor(bet * multiplier)``; a no-op unless running."""
        if self.state is not RoundState.RUNNING:
            return CommandResult(False, Rejection.NOT_RUNNING)

        self.state = RoundState.CASHED_OUT
        multiplier = self.risk.multiplier
        amount = payout(self.bet, multiplier)
        profit = amount - self.bet
        self.balance += amount
        self.last_payout = amount
        self.last_profit = profit
        self._record_best_score()

        logger.info(
            "Cashed out at %.2fx: payout=%d profit=%d balance=%d",
            multiplier,
            amount,
            profit,
            self.balance,
        )
        self._emit(CashedOut(payout=amount, profit=profit, multiplier=multiplier))
        return ACCEPTED

    def reset_balance(self) -> CommandResult:
        """Restore the starting bankroll between rounds."""
        if self.state is RoundState.RUNNING:
            return CommandResult(False, Rejection.ROUND_IN_PROGRESS)
        self.balance = self.config.starting_balance
        logger.info("Balance reset to %d", self.balance)
        self._emit(BalanceReset(balance=self.balance))
        return ACCEPTED

    # --- Simulation -----------------------------------------------------

    def tick(self, elapsed_ms: float) -> None:
        """Advance one frame: grow, roll for a crash, then maybe move the snake."""
        if self.state is not RoundState.RUNNING:
            return

        self.risk.grow()
        if self.risk.roll_crash():
            self._crash(CrashCause.RISK)
            return

        self._step_accumulator += elapsed_ms
        if self._step_accumulator >= self.step_interval_ms:
            self._step_accumulator -= self.step_interval_ms
            self._advance_snake()

    def _advance_snake(self) -> None:
        self.snake.apply_pending_direction()
        food_cells = {item.cell for item in self.food}
        result = self.snake.step(self.grid, food_cells)

        if result.outcome is StepOutcome.DIED:
            self._crash(CrashCause(result.reason.value))
        elif result.outcome is StepOutcome.ATE_FOOD:
            self._eat(result.cell)

    def _eat(self, cell: Cell) -> None:
        eaten, remaining = self.food_manager.take(self.food, cell)
        self.food = self.food_manager.replenish(self.snake.body, remaining)
        self.score += 1
        self.step_interval_ms = max(
            self.config.min_speed_ms,
            self.step_interval_ms - self.config.speed_increase_ms,
        )
        bonus = self.risk.register_food()

        logger.debug(
            "Food eaten at %s: score=%d interval=%.0fms",
            cell,
            self.score,
            self.step_interval_ms,
        )
        self._emit(
            FoodEaten(
                cell=cell,
                color=eaten.color if eaten else "",
                food_eaten=self.risk.food_eaten,
                score=self.score,
            )
        )
        if bonus is not None:
            amount = self.risk.bonus_amount(bonus)
            logger.debug(
                "%s bonus +%.2fx -> %.2fx", bonus.value, amount, self.risk.multiplier
            )
            self._emit(
                BonusTriggered(
                    kind=bonus, amount=amount, multiplier=self.risk.multiplier
                )
            )

    def _crash(self, cause: CrashCause) -> None:
        self.state = RoundState.CRASHED
        self.crash_cause = cause
        self._record_best_score()
        multiplier = self.risk.multiplier
        logger.info(
            "Crashed (%s) at %.2fx: lost bet=%d balance=%d",
            cause.value,
            multiplier,
            self.bet,
            self.balance,
        )
        self._emit(Crashed(multiplier=multiplier, cause=cause, bet=self.bet))

    def _record_best_score(self) -> None:
        if self.score > self.best_score:
            self.best_score = self.score
