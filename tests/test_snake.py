"""Tests for snake movement, growth and collisions."""

import pytest

from snake_cashout.grid import Grid
from snake_cashout.snake import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    DeathReason,
    Snake,
    StepOutcome,
)

GRID = Grid(20, 16)


class TestSnakeSpawn:
    def test_spawn_centered_heading_right(self):
        snake = Snake.spawn(GRID)
        assert list(snake.body) == [(10, 8), (9, 8), (8, 8)]
        assert snake.direction == RIGHT
        assert snake.pending_direction == RIGHT
        assert snake.alive

    def test_empty_body_rejected(self):
        with pytest.raises(ValueError, match="at least one segment"):
            Snake([])


class TestSnakeDirection:
    def test_reversal_is_dropped(self):
        snake = Snake.spawn(GRID)
        snake.set_pending_direction(LEFT)
        assert snake.pending_direction == RIGHT

    def test_turn_is_queued_until_applied(self):
        snake = Snake.spawn(GRID)
        snake.set_pending_direction(UP)
        assert snake.pending_direction == UP
        assert snake.direction == RIGHT
        snake.apply_pending_direction()
        assert snake.direction == UP

    def test_non_unit_vector_is_dropped(self):
        snake = Snake.spawn(GRID)
        snake.set_pending_direction((1, 1))
        snake.set_pending_direction((0, 0))
        assert snake.pending_direction == RIGHT

    def test_reversal_checked_against_applied_direction(self):
        snake = Snake.spawn(GRID)
        snake.set_pending_direction(UP)
        # DOWN is only the opposite of the queued turn, not of the heading.
        snake.set_pending_direction(DOWN)
        assert snake.pending_direction == DOWN


class TestSnakeStep:
    def test_move_keeps_length(self):
        snake = Snake.spawn(GRID)
        result = snake.step(GRID)
        assert result.outcome is StepOutcome.MOVED
        assert result.cell == (11, 8)
        assert list(snake.body) == [(11, 8), (10, 8), (9, 8)]

    def test_eating_grows_by_one(self):
        snake = Snake.spawn(GRID)
        result = snake.step(GRID, {(11, 8)})
        assert result.outcome is StepOutcome.ATE_FOOD
        assert result.cell == (11, 8)
        assert list(snake.body) == [(11, 8), (10, 8), (9, 8), (8, 8)]

    def test_wall_collision_is_death_not_clamp(self):
        snake = Snake([(19, 5), (18, 5)], RIGHT)
        result = snake.step(GRID)
        assert result.outcome is StepOutcome.DIED
        assert result.reason is DeathReason.WALL
        assert list(snake.body) == [(19, 5), (18, 5)]
        assert not snake.alive

    @pytest.mark.parametrize(
        "body, direction",
        [
            ([(0, 3), (1, 3)], LEFT),
            ([(4, 0), (4, 1)], UP),
            ([(4, 15), (4, 14)], DOWN),
        ],
    )
    def test_every_wall_kills(self, body, direction):
        snake = Snake(body, direction)
        assert snake.step(GRID).reason is DeathReason.WALL

    def test_self_collision(self):
        snake = Snake([(2, 2), (3, 2), (3, 3), (2, 3), (1, 3)], DOWN)
        result = snake.step(GRID)
        assert result.outcome is StepOutcome.DIED
        assert result.reason is DeathReason.SELF

    def test_moving_onto_current_tail_is_self_collision(self):
        snake = Snake([(1, 0), (1, 1), (0, 1), (0, 0)], LEFT)
        result = snake.step(GRID)
        assert result.outcome is StepOutcome.DIED
        assert result.reason is DeathReason.SELF
        assert len(snake) == 4

    def test_dead_snake_is_frozen(self):
        snake = Snake([(19, 5), (18, 5)], RIGHT)
        snake.step(GRID)
        snake.set_pending_direction(UP)
        snake.apply_pending_direction()
        result = snake.step(GRID)
        assert result.outcome is StepOutcome.DIED
        assert result.reason is DeathReason.WALL
        assert list(snake.body) == [(19, 5), (18, 5)]

    def test_never_leaves_grid_while_alive(self):
        snake = Snake.spawn(GRID)
        while snake.alive:
            snake.step(GRID)
            assert all(GRID.is_inside(cell) for cell in snake.body)
