"""Deterministic snake movement, growth and collision rules."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass
from typing import Container, Iterable

from .grid import Cell, Grid

Direction = tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)

DIRECTIONS: dict[str, Direction] = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}

SPAWN_LENGTH: int = 3


def opposite(direction: Direction) -> Direction:
    return -direction[0], -direction[1]


class StepOutcome(enum.Enum):
    MOVED = "moved"
    ATE_FOOD = "ate_food"
    DIED = "died"


class DeathReason(str, enum.Enum):
    WALL = "wall"
    SELF = "self"


@dataclass(frozen=True, slots=True)
class StepResult:
    """What one movement step did: moved, ate food at ``cell``, or died."""

    outcome: StepOutcome
    cell: Cell | None = None
    reason: DeathReason | None = None


class Snake:
    """Ordered body segments, head first, plus the applied and queued directions."""

    def __init__(self, body: Iterable[Cell], direction: Direction = RIGHT) -> None:
        self.body: deque[Cell] = deque(body)
        if not self.body:
            raise ValueError("Snake needs at least one segment")
        self.direction: Direction = direction
        self.pending_direction: Direction = direction
        self.alive: bool = True
        self.death_reason: DeathReason | None = None

    @classmethod
    def spawn(cls, grid: Grid) -> Snake:
        """Head on the grid centre, two segments trailing to the left, heading right."""
        cx, cy = grid.center
        body = [(cx - offset, cy) for offset in range(SPAWN_LENGTH)]
        return cls(body, RIGHT)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def set_pending_direction(self, direction: Direction) -> None:
        """Queue a turn; reversals and anything but a unit vector are dropped."""
        if direction not in DIRECTIONS.values():
            return
        if direction == opposite(self.direction):
            return
        self.pending_direction = direction

    def apply_pending_direction(self) -> None:
        self.direction = self.pending_direction

    def next_head(self) -> Cell:
        dx, dy = self.direction
        x, y = self.head
        return x + dx, y + dy

    def step(self, grid: Grid, food_cells: Container[Cell] = ()) -> StepResult:
        """Advance exactly one cell in the current direction."""
        if not self.alive:
            return StepResult(StepOutcome.DIED, reason=self.death_reason)

        new_head = self.next_head()
        if not grid.is_inside(new_head):
            return self._die(DeathReason.WALL)
        # The tail still counts as occupied even though it would move away.
        if new_head in self.body:
            return self._die(DeathReason.SELF)

        self.body.appendleft(new_head)
        if new_head in food_cells:
            return StepResult(StepOutcome.ATE_FOOD, cell=new_head)
        self.body.pop()
        return StepResult(StepOutcome.MOVED, cell=new_head)

    def _die(self, reason: DeathReason) -> StepResult:
        self.alive = False
        self.death_reason = reason
        return StepResult(StepOutcome.DIED, reason=reason)
