import random

import pytest

from neon_slam.engine import simulate_match, win_probability


def test_probability_is_symmetric() -> None:
    for a, b in [(1000, 10), (620.5, 580.0), (1.0, 3.0), (0.0, 40.0)]:
        assert win_probability(a, b) + win_probability(b, a) == pytest.approx(1.0)


def test_equal_strength_is_a_coin_flip() -> None:
    assert win_probability(800, 800) == pytest.approx(0.5)
    assert win_probability(0, 0) == 0.5


def test_probability_is_clamped_away_from_certainty() -> None:
    assert win_probability(0, 500, exponent=1) == pytest.approx(0.001)
    assert win_probability(500, 0, exponent=1) == pytest.approx(0.999)
    assert win_probability(0, 500) > 0.0


def test_exponent_stretches_small_edges() -> None:
    assert win_probability(1100, 1000) > 0.6
    assert win_probability(1100, 1000, exponent=1) < 0.53


def test_even_match_wins_are_near_half() -> None:
    rng = random.Random(2024)
    strengths = {"a": 900.0, "b": 900.0}
    wins = sum(1 for _ in range(10_000) if simulate_match("a", "b", strengths, rng).winner_id == "a")
    assert 4800 <= wins <= 5200


def test_lopsided_match_is_almost_always_won() -> None:
    rng = random.Random(7)
    strengths = {"strong": 1000.0, "weak": 10.0}
    wins = sum(1 for _ in range(10_000) if simulate_match("strong", "weak", strengths, rng).winner_id == "strong")
    assert wins > 9900


def test_match_result_names_both_sides() -> None:
    result = simulate_match("a", "b", {"a": 10.0, "b": 10.0}, random.Random(1))
    assert {result.winner_id, result.loser_id} == {"a", "b"}
    assert 0.0 < result.win_probability < 1.0
