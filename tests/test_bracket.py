import random

import pytest

from neon_slam.app import build_default_roster
from neon_slam.bracket import (
    BracketContext,
    apply_human_result,
    build_tournament,
    create_tournament,
    draw_field,
    forfeit,
    furthest_round,
    pending_human_match,
)
from neon_slam.catalog import AI_PROFILES, item_index
from neon_slam.config import HUMAN_PLAYER_ID
from neon_slam.eligibility import rank_table
from neon_slam.errors import InsufficientFieldError, NoPendingMatchError
from neon_slam.models import (
    STATUS_ACTIVE,
    STATUS_CHAMPION,
    STATUS_ELIMINATED,
    RankingGate,
    TournamentDefinition,
    TournamentMatch,
    TournamentState,
)


def _definition(**overrides) -> TournamentDefinition:
    values = {
        "id": "test-open",
        "name": "Test Open",
        "category": "elite",
        "tier": "elite",
        "surface": "clay",
        "block": 1,
        "prizes": (10, 20, 40, 80),
        "ranking_points": (5, 10, 20, 40, 80),
    }
    values.update(overrides)
    return TournamentDefinition(**values)


def _setup(seed: int = 3, ai_players: int = 127):
    roster = build_default_roster(ai_players=ai_players)
    ranks = rank_table(roster)
    context = BracketContext.from_players(roster, item_index(), default_profile_id=AI_PROFILES[0].id)
    return roster, ranks, context, random.Random(seed)


def _assert_consistent(state: TournamentState) -> None:
    for round_index, matches in enumerate(state.rounds):
        assert all(match.is_decided for match in matches)
        if round_index + 1 < len(state.rounds):
            winners = [match.winner_id for match in matches]
            seated = [pid for match in state.rounds[round_index + 1] for pid in (match.player1_id, match.player2_id)]
            assert winners == seated
    assert state.is_complete
    assert state.champion_id == state.final.winner_id


def test_draw_field_seats_eligible_human() -> None:
    roster, ranks, _, rng = _setup()
    entrants = draw_field(_definition(), roster, ranks, rng, human_id=HUMAN_PLAYER_ID)
    assert len(entrants) == 16
    assert len(set(entrants)) == 16
    assert HUMAN_PLAYER_ID in entrants


def test_draw_field_respects_rank_gate() -> None:
    roster, ranks, _, rng = _setup()
    assert ranks[HUMAN_PLAYER_ID] > 20
    entrants = draw_field(_definition(ranking_gate=RankingGate(max_rank=20)), roster, ranks, rng, human_id=HUMAN_PLAYER_ID)
    assert HUMAN_PLAYER_ID not in entrants
    assert all(ranks[pid] <= 20 for pid in entrants)


def test_short_field_raises_insufficient_field() -> None:
    roster, ranks, _, rng = _setup(ai_players=10)
    with pytest.raises(InsufficientFieldError) as excinfo:
        draw_field(_definition(), roster, ranks, rng)
    assert excinfo.value.available == 10
    assert excinfo.value.needed == 16


def test_new_tournament_waits_on_human_opening_match() -> None:
    roster, ranks, context, rng = _setup()
    state = build_tournament(_definition(), roster, ranks, context, rng, human_id=HUMAN_PLAYER_ID)
    assert state.status == STATUS_ACTIVE
    pending = pending_human_match(state)
    assert pending is not None
    assert pending.round == 1
    assert pending.ai_profile_id is not None
    undecided = [match for match in state.rounds[0] if not match.is_decided]
    assert undecided == [pending]


def test_human_run_to_title_keeps_bracket_consistent() -> None:
    roster, ranks, context, rng = _setup()
    state = build_tournament(_definition(), roster, ranks, context, rng, human_id=HUMAN_PLAYER_ID)
    while state.status == STATUS_ACTIVE:
        state = apply_human_result(state, True, context, rng)
    assert state.status == STATUS_CHAMPION
    assert state.champion_id == HUMAN_PLAYER_ID
    assert furthest_round(state, HUMAN_PLAYER_ID) == 4
    _assert_consistent(state)


def test_human_loss_drives_bracket_to_the_end() -> None:
    roster, ranks, context, rng = _setup()
    state = build_tournament(_definition(), roster, ranks, context, rng, human_id=HUMAN_PLAYER_ID)
    opening = pending_human_match(state)
    state = apply_human_result(state, False, context, rng)
    assert state.status == STATUS_ELIMINATED
    assert state.find_match(opening.id).winner_id == opening.opponent_of(HUMAN_PLAYER_ID)
    assert state.champion_id != HUMAN_PLAYER_ID
    assert pending_human_match(state) is None
    _assert_consistent(state)


def test_forfeit_hands_pending_match_to_opponent() -> None:
    roster, ranks, context, rng = _setup()
    state = build_tournament(_definition(), roster, ranks, context, rng, human_id=HUMAN_PLAYER_ID)
    state = apply_human_result(state, True, context, rng)
    second = pending_human_match(state)
    assert second is not None and second.round == 2
    state = forfeit(state, context, rng)
    assert state.status == STATUS_ELIMINATED
    assert state.find_match(second.id).winner_id == second.opponent_of(HUMAN_PLAYER_ID)
    assert furthest_round(state, HUMAN_PLAYER_ID) == 2
    _assert_consistent(state)
    assert forfeit(state, context, rng) is state


def test_ai_only_tournament_is_simulated_immediately() -> None:
    roster, _, context, rng = _setup()
    entrants = [p.id for p in roster if not p.is_human][:16]
    state = create_tournament(_definition(), entrants, context, rng)
    assert state.human_id is None
    assert state.status == STATUS_ELIMINATED
    _assert_consistent(state)


def test_duplicate_entrants_are_rejected() -> None:
    roster, _, context, rng = _setup()
    entrants = [p.id for p in roster[:15]] + [roster[0].id]
    with pytest.raises(ValueError):
        create_tournament(_definition(), entrants, context, rng)


def test_result_without_pending_match_raises() -> None:
    roster, _, context, rng = _setup()
    entrants = [p.id for p in roster if not p.is_human][:16]
    state = create_tournament(_definition(), entrants, context, rng)
    with pytest.raises(NoPendingMatchError):
        apply_human_result(state, True, context, rng)


def test_state_rejects_winner_outside_match() -> None:
    roster, _, context, rng = _setup()
    entrants = [p.id for p in roster if not p.is_human][:16]
    state = create_tournament(_definition(), entrants, context, rng)
    bad = TournamentMatch(id="x", round=1, slot=0, player1_id="a", player2_id="b", winner_id="c")
    with pytest.raises(ValueError):
        state.with_round(0, [bad, *state.rounds[0][1:]])
