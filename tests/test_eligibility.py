from neon_slam.catalog import DEFAULT_HUMAN_LOADOUT
from neon_slam.eligibility import (
    eligible_players,
    field_pool,
    in_category_band,
    is_eligible,
    rank_order,
    rank_table,
    seed_rank_table,
)
from neon_slam.models import PlayerProfile, RankingGate, TournamentDefinition


def _definition(gate: RankingGate, category: str = "pro") -> TournamentDefinition:
    return TournamentDefinition(
        id="gate-test",
        name="Gate Test",
        category=category,
        tier="pro",
        surface="clay",
        block=3,
        prizes=(10, 20, 30, 40),
        ranking_points=(1, 2, 3, 4, 5),
        ranking_gate=gate,
    )


def _player(player_id: str, name: str, points: int = 0, seed: int = 0, human: bool = False) -> PlayerProfile:
    return PlayerProfile(
        id=player_id,
        name=name,
        loadout=DEFAULT_HUMAN_LOADOUT,
        ranking_points=points,
        seed_ranking=seed,
        is_human=human,
    )


def test_rank_order_sorts_points_then_name() -> None:
    players = [_player("c", "Cara", 10), _player("a", "Abe", 10), _player("b", "Bo", 30)]
    assert [p.id for p in rank_order(players)] == ["b", "a", "c"]
    assert rank_table(players) == {"b": 1, "a": 2, "c": 3}


def test_seed_rank_table_puts_unseeded_last() -> None:
    players = [_player("x", "Xan", seed=0), _player("y", "Yul", seed=2), _player("z", "Zed", seed=1)]
    assert seed_rank_table(players) == {"z": 1, "y": 2, "x": 3}


def test_max_rank_gate_rejects_rank_below_cutoff() -> None:
    definition = _definition(RankingGate(max_rank=8))
    assert is_eligible(definition, 8, 0)
    assert not is_eligible(definition, 9, 0)


def test_min_points_gate() -> None:
    definition = _definition(RankingGate(max_rank=32, min_points=100))
    assert is_eligible(definition, 5, 100)
    assert not is_eligible(definition, 5, 99)
    assert is_eligible(definition, 5, None)
    assert not is_eligible(definition, 40, None)


def test_open_gate_admits_everyone() -> None:
    definition = _definition(RankingGate())
    assert definition.ranking_gate.is_open
    assert is_eligible(definition, 500, 0)


def test_category_bands() -> None:
    assert in_category_band("itf", 64)
    assert in_category_band("itf", 117)
    assert not in_category_band("itf", 63)
    assert not in_category_band("grand-slam", 33)
    assert in_category_band("unknown", 999)


def test_field_pool_excludes_human_and_out_of_band_players() -> None:
    players = [_player(f"p{i}", f"Player {i:03d}", points=200 - i) for i in range(1, 41)]
    players.append(_player("me", "Me", points=500, human=True))
    ranks = rank_table(players)
    definition = _definition(RankingGate(max_rank=36), category="grand-slam")
    pool = field_pool(definition, players, ranks)
    assert all(ranks[p.id] <= 32 for p in pool)
    assert "me" not in {p.id for p in pool}
    assert "me" in {p.id for p in eligible_players(definition, players, ranks)}
