import random

from neon_slam.app import build_default_roster
from neon_slam.bracket import BracketContext, create_tournament
from neon_slam.catalog import DEFAULT_HUMAN_LOADOUT, item_index
from neon_slam.ledger import apply_credit_batch, apply_credits, mark_awarded, placement_credits, recompute_total
from neon_slam.models import PlayerProfile, TournamentDefinition


def _definition() -> TournamentDefinition:
    return TournamentDefinition(
        id="ledger-open",
        name="Ledger Open",
        category="pro",
        tier="pro",
        surface="grass",
        block=2,
        prizes=(10, 20, 40, 80),
        ranking_points=(5, 10, 20, 40, 80),
    )


def _player(player_id: str, points: int = 0, credits: dict[str, int] | None = None) -> PlayerProfile:
    return PlayerProfile(
        id=player_id,
        name=player_id.title(),
        loadout=DEFAULT_HUMAN_LOADOUT,
        ranking_points=points,
        tournament_ranking_points=dict(credits or {}),
    )


def test_placement_credits_follow_round_reached() -> None:
    roster = build_default_roster(ai_players=20)
    context = BracketContext.from_players(roster, item_index())
    entrants = [p.id for p in roster if not p.is_human][:16]
    state = create_tournament(_definition(), entrants, context, random.Random(5))
    credits = placement_credits(state, _definition())
    assert set(credits) == set(entrants)
    assert sorted(credits.values()) == [5] * 8 + [10] * 4 + [20] * 2 + [40, 80]
    assert credits[state.champion_id] == 80


def test_lower_finish_replaces_previous_credit() -> None:
    player = _player("ana", points=100, credits={"ledger-open": 80, "other": 20})
    deltas = apply_credits([player], "ledger-open", {"ana": 10})
    assert deltas == {"ana": -70}
    assert player.ranking_points == 30
    assert player.tournament_ranking_points == {"ledger-open": 10, "other": 20}


def test_reapplying_credits_is_a_no_op() -> None:
    players = [_player("ana"), _player("bo")]
    apply_credits(players, "ledger-open", {"ana": 40, "bo": 5})
    assert apply_credits(players, "ledger-open", {"ana": 40, "bo": 5}) == {}
    assert [p.ranking_points for p in players] == [40, 5]


def test_absent_player_loses_defended_credit() -> None:
    player = _player("cy", points=25, credits={"ledger-open": 25})
    assert apply_credits([player], "ledger-open", {}) == {"cy": -25}
    assert player.ranking_points == 0
    assert "ledger-open" not in player.tournament_ranking_points


def test_credit_batch_sums_deltas() -> None:
    players = [_player("ana"), _player("bo")]
    totals = apply_credit_batch(players, {"one": {"ana": 10}, "two": {"ana": 5, "bo": 3}})
    assert totals == {"ana": 15, "bo": 3}
    assert all(recompute_total(p) == p.ranking_points for p in players)


def test_mark_awarded_flags_decided_matches() -> None:
    roster = build_default_roster(ai_players=20)
    context = BracketContext.from_players(roster, item_index())
    entrants = [p.id for p in roster if not p.is_human][:16]
    state = mark_awarded(create_tournament(_definition(), entrants, context, random.Random(9)))
    assert all(match.ranking_awarded for match in state.matches())
