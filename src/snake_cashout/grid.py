"""Fixed-size board the snake and food live on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

Cell = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Grid:
    columns: int
    rows: int

    def is_inside(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.columns and 0 <= y < self.rows

    @property
    def center(self) -> Cell:
        return self.columns // 2, self.rows // 2

    def random_cell(self, rng) -> Cell:
        """Sample a uniformly random cell from ``rng`` (a ``random.Random``)."""
        return rng.randrange(self.columns), rng.randrange(self.rows)

    def cells(self) -> Iterator[Cell]:
        for y in range(self.rows):
            for x in range(self.columns):
                yield x, y
