"""Tests for the Monte Carlo RTP simulator and its autopilot."""

import json

import pytest

from snake_cashout.config import COMBO_VARIANT, SPIKE_VARIANT
from snake_cashout.food import Food
from snake_cashout.grid import Grid
from snake_cashout.session import RoundState, Snapshot
from snake_cashout.simulation import bucket_for, choose_direction, main, simulate

GRID = Grid(20, 16)


def snapshot(snake, direction, food=()):
    return Snapshot(
        state=RoundState.RUNNING,
        multiplier=1.0,
        balance=900,
        bet=100,
        score=0,
        best_score=0,
        food_eaten=0,
        streak=0,
        bonus_count=0,
        step_interval_ms=138.0,
        crash_probability=0.0028,
        direction=direction,
        snake=tuple(snake),
        food=tuple(Food(cell, "#fff") for cell in food),
        last_payout=None,
        last_profit=None,
        crash_cause=None,
    )


class TestAutopilot:
    def test_heads_for_food(self):
        snap = snapshot([(10, 8), (9, 8), (8, 8)], (1, 0), food=[(10, 2)])
        assert choose_direction(GRID, snap) == (0, -1)

    def test_turns_away_from_wall(self):
        snap = snapshot([(19, 8), (18, 8), (17, 8)], (1, 0), food=[(25, 8)])
        assert choose_direction(GRID, snap) in {(0, -1), (0, 1)}

    def test_never_reverses(self):
        snap = snapshot([(10, 8), (11, 8), (12, 8)], (-1, 0), food=[(15, 8)])
        assert choose_direction(GRID, snap) != (1, 0)

    def test_avoids_own_body(self):
        snap = snapshot([(5, 5), (5, 6), (4, 6), (4, 5), (4, 4)], (0, -1), food=[(3, 5)])
        assert choose_direction(GRID, snap) in {(0, -1), (1, 0)}


class TestSimulate:
    def test_deterministic_for_seed(self):
        first = simulate(COMBO_VARIANT, 150, seed=7)
        second = simulate(COMBO_VARIANT, 150, seed=7)
        assert first.to_dict() == second.to_dict()

    def test_accounting_adds_up(self):
        result = simulate(COMBO_VARIANT, 200, cashout_at=1.5, seed=3)
        assert result.cashouts + result.risk_crashes + result.collisions == 200
        assert result.total_wagered == 200 * COMBO_VARIANT.min_bet
        assert sum(result.distribution.values()) == 200
        assert result.total_returned >= result.cashouts * 15
        assert result.rtp == pytest.approx(result.total_returned / result.total_wagered)

    def test_crashes_skew_toward_low_multipliers(self):
        result = simulate(SPIKE_VARIANT, 400, cashout_at=10.0, seed=11)
        crashes = result.crash_distribution
        assert crashes.get("1-2x", 0) > crashes.get("2-5x", 0) > crashes.get("5-10x", 0)

    def test_unplayable_bet(self):
        with pytest.raises(ValueError, match="not playable"):
            simulate(COMBO_VARIANT, 1, bet=5)

    def test_buckets(self):
        assert bucket_for(1.0) == "1-2x"
        assert bucket_for(2.0) == "2-5x"
        assert bucket_for(9.99) == "5-10x"


class TestCli:
    def test_json_output(self, capsys):
        main(["--variant", "spike", "--rounds", "20", "--seed", "1", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["variant"] == "spike"
        assert data["rounds"] == 20
        assert 0.0 <= data["hit_rate"] <= 1.0

    def test_text_summary(self, capsys):
        main(["--rounds", "10", "--variant", "combo"])
        out = capsys.readouterr().out
        assert "Variant combo: 10 rounds" in out
        assert "RTP" in out
