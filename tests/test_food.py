"""Tests for food placement."""

import logging
import random

from conftest import ScriptedRandom

from snake_cashout.food import Food, FoodManager
from snake_cashout.grid import Grid

GRID = Grid(20, 16)
SNAKE = [(10, 8), (9, 8), (8, 8)]


class TestReplenish:
    def test_fills_to_count_avoiding_snake_and_food(self):
        rng = ScriptedRandom(ints=[10, 8, 3, 3, 3, 3, 4, 4])
        manager = FoodManager(GRID, ["#fff"], rng=rng)
        food = manager.replenish(SNAKE, [])
        assert [item.cell for item in food] == [(3, 3), (4, 4)]

    def test_keeps_existing_items(self):
        rng = ScriptedRandom(ints=[5, 5])
        manager = FoodManager(GRID, ["#fff"], rng=rng)
        existing = [Food(cell=(1, 1), color="#abc")]
        food = manager.replenish(SNAKE, existing)
        assert food[0] == existing[0]
        assert food[1].cell == (5, 5)

    def test_full_set_is_untouched(self):
        manager = FoodManager(GRID, ["#fff"], rng=random.Random(0))
        existing = [Food((1, 1), "#a"), Food((2, 2), "#b")]
        assert manager.replenish(SNAKE, existing) == existing

    def test_exhaustion_accepts_colliding_cell(self, caplog):
        grid = Grid(4, 1)
        snake = [(0, 0), (1, 0), (2, 0), (3, 0)]
        manager = FoodManager(grid, ["#fff"], count=1, max_attempts=5, rng=random.Random(3))
        with caplog.at_level(logging.WARNING, logger="snake_cashout.food"):
            food = manager.replenish(snake, [])
        assert len(food) == 1
        assert food[0].cell in snake
        assert "No free cell after 5 attempts" in caplog.text

    def test_random_color_from_palette(self):
        manager = FoodManager(GRID, ["#111", "#222"], rng=random.Random(5))
        food = manager.replenish(SNAKE, [])
        assert all(item.color in ("#111", "#222") for item in food)

    def test_cycle_colors_round_robin(self):
        manager = FoodManager(
            GRID, ["a", "b"], count=3, color_mode="cycle", rng=random.Random(0)
        )
        food = manager.replenish(SNAKE, [])
        assert [item.color for item in food] == ["a", "b", "a"]
        manager.reset()
        assert manager.replenish(SNAKE, [])[0].color == "a"


class TestTake:
    def test_splits_off_eaten_item(self):
        manager = FoodManager(GRID, ["#fff"])
        food = [Food((1, 1), "#a"), Food((2, 2), "#b")]
        eaten, remaining = manager.take(food, (2, 2))
        assert eaten == Food((2, 2), "#b")
        assert remaining == [Food((1, 1), "#a")]

    def test_missing_cell(self):
        manager = FoodManager(GRID, ["#fff"])
        food = [Food((1, 1), "#a")]
        eaten, remaining = manager.take(food, (9, 9))
        assert eaten is None
        assert remaining == food
