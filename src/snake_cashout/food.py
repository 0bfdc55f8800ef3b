"""Food placement: keeps a fixed number of items on free cells."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Container, Sequence

from .grid import Cell, Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Food:
    """A food item; ``color`` is a cosmetic tag for the renderer."""

    cell: Cell
    color: str


class FoodManager:
    """Spawns food by rejection sampling against the snake and existing food."""

    def __init__(
        self,
        grid: Grid,
        colors: Sequence[str],
        *,
        count: int = 2,
        max_attempts: int = 120,
        color_mode: str = "random",
        rng: random.Random | None = None,
    ) -> None:
        self.grid = grid
        self.colors = tuple(colors)
        self.count = count
        self.max_attempts = max_attempts
        self.color_mode = color_mode
        self.rng = rng or random.Random()
        self._color_index = 0

    def reset(self) -> None:
        self._color_index = 0

    def replenish(self, snake_cells: Container[Cell], food: Sequence[Food]) -> list[Food]:
        """Return ``food`` topped up to ``count`` items."""
        items = list(food)
        while len(items) < self.count:
            cell = self._sample_cell(snake_cells, items)
            items.append(Food(cell=cell, color=self._next_color()))
        return items

    def take(self, food: Sequence[Food], cell: Cell) -> tuple[Food | None, list[Food]]:
        """Split off the item sitting on ``cell``; returns (eaten, remaining)."""
        eaten = None
        remaining: list[Food] = []
        for item in food:
            if eaten is None and item.cell == cell:
                eaten = item
            else:
                remaining.append(item)
        return eaten, remaining

    def _sample_cell(self, snake_cells: Container[Cell], items: Sequence[Food]) -> Cell:
        taken = {item.cell for item in items}
        cell = self.grid.random_cell(self.rng)
        attempts = 1
        while cell in snake_cells or cell in taken:
            if attempts >= self.max_attempts:
                logger.warning(
                    "No free cell after %d attempts; placing food on %s anyway",
                    attempts,
                    cell,
                )
                break
            cell = self.grid.random_cell(self.rng)
            attempts += 1
        return cell

    def _next_color(self) -> str:
        if self.color_mode == "cycle":
            color = self.colors[self._color_index % len(self.colors)]
            self._color_index += 1
            return color
        return self.rng.choice(self.colors)
