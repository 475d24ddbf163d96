from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping

from .config import BRACKET_SIZE, ROUND_SIZES
from .eligibility import eligible_players, field_pool, is_eligible
from .engine import build_strength_table, simulate_match
from .errors import InsufficientFieldError, NoPendingMatchError
from .models import (
    STATUS_ACTIVE,
    STATUS_CHAMPION,
    STATUS_ELIMINATED,
    PlayerProfile,
    ShopItem,
    TournamentDefinition,
    TournamentMatch,
    TournamentState,
)

_log = logging.getLogger("neon_slam.bracket")

LAST_ROUND = len(ROUND_SIZES) - 1


@dataclass(frozen=True, slots=True)
class BracketContext:
    """Lookups the resolver needs: match strength per player and AI profile bindings."""

    strengths: Mapping[str, float]
    profile_ids: Mapping[str, str | None] = field(default_factory=dict)
    default_profile_id: str | None = None

    @classmethod
    def from_players(
        cls,
        players: Iterable[PlayerProfile],
        items: Mapping[str, ShopItem],
        default_profile_id: str | None = None,
    ) -> BracketContext:
        roster = list(players)
        return cls(
            strengths=build_strength_table(roster, items),
            profile_ids={p.id: p.ai_profile_id for p in roster},
            default_profile_id=default_profile_id,
        )

    def profile_for(self, player_id: str | None) -> str | None:
        if player_id is None:
            return None
        return self.profile_ids.get(player_id) or self.default_profile_id


def match_id(tournament_id: str, round_index: int, slot: int) -> str:
    return f"{tournament_id}-r{round_index + 1}-m{slot + 1}"


def draw_field(
    definition: TournamentDefinition,
    players: Iterable[PlayerProfile],
    ranks: Mapping[str, int],
    rng: random.Random,
    human_id: str | None = None,
    exclude_ids: Iterable[str] = (),
    check_points: bool = True,
) -> list[str]:
    """Pick the 16 entrants of a draw, in bracket order.

    The banded AI pool is shuffled and cut to 16. An eligible human who missed
    the cut takes the last slot. Short draws are topped up from the remaining
    gate-eligible AI players; if that still falls short nothing is built.
    """
    excluded = set(exclude_ids)
    candidates = [p for p in players if p.id not in excluded]
    pool = field_pool(definition, candidates, ranks, check_points)
    rng.shuffle(pool)
    entrants = [p.id for p in pool[:BRACKET_SIZE]]

    human = next((p for p in candidates if p.id == human_id), None)
    if human is not None and human.id in ranks:
        points = human.ranking_points if check_points else None
        if is_eligible(definition, ranks[human.id], points) and human.id not in entrants:
            if len(entrants) >= BRACKET_SIZE:
                entrants[-1] = human.id
            else:
                entrants.append(human.id)

    if len(entrants) < BRACKET_SIZE:
        drawn = set(entrants)
        reserves = [
            p
            for p in eligible_players(definition, candidates, ranks, check_points)
            if p.id not in drawn and not p.is_human
        ]
        rng.shuffle(reserves)
        entrants.extend(p.id for p in reserves[: BRACKET_SIZE - len(entrants)])

    if len(entrants) < BRACKET_SIZE:
        raise InsufficientFieldError(definition.id, len(entrants), BRACKET_SIZE)
    return entrants


def create_tournament(
    definition: TournamentDefinition,
    entrants: list[str],
    context: BracketContext,
    rng: random.Random,
    human_id: str | None = None,
) -> TournamentState:
    if len(entrants) != BRACKET_SIZE or len(set(entrants)) != BRACKET_SIZE:
        raise ValueError(f"{definition.id}: a draw needs {BRACKET_SIZE} distinct entrants.")
    in_draw = human_id if human_id in entrants else None

    opening: list[TournamentMatch] = []
    for slot in range(ROUND_SIZES[0]):
        p1, p2 = entrants[slot * 2], entrants[slot * 2 + 1]
        profile = None
        if in_draw is not None and in_draw in (p1, p2):
            profile = context.profile_for(p2 if p1 == in_draw else p1)
        opening.append(
            TournamentMatch(
                id=match_id(definition.id, 0, slot),
                round=1,
                slot=slot,
                player1_id=p1,
                player2_id=p2,
                ai_profile_id=profile,
            )
        )
    rounds = [tuple(opening)]
    for round_index, size in enumerate(ROUND_SIZES[1:], start=1):
        rounds.append(
            tuple(
                TournamentMatch(id=match_id(definition.id, round_index, slot), round=round_index + 1, slot=slot)
                for slot in range(size)
            )
        )
    state = TournamentState(tournament_id=definition.id, rounds=tuple(rounds), human_id=in_draw)

    if in_draw is None:
        _log.debug("%s: no human in the draw, simulating to the end.", definition.id)
        return drive_to_end(state.with_status(STATUS_ELIMINATED), 0, context, rng)
    state = resolve_round(state, 0, context, rng)
    return propagate_round(state, 0, context)


def build_tournament(
    definition: TournamentDefinition,
    players: Iterable[PlayerProfile],
    ranks: Mapping[str, int],
    context: BracketContext,
    rng: random.Random,
    human_id: str | None = None,
    exclude_ids: Iterable[str] = (),
    check_points: bool = True,
) -> TournamentState:
    entrants = draw_field(definition, players, ranks, rng, human_id, exclude_ids, check_points)
    return create_tournament(definition, entrants, context, rng, human_id)


def _check_round(round_index: int) -> None:
    if not 0 <= round_index <= LAST_ROUND:
        raise ValueError(f"Round index {round_index} outside 0..{LAST_ROUND}.")


def resolve_round(
    state: TournamentState,
    round_index: int,
    context: BracketContext,
    rng: random.Random,
) -> TournamentState:
    """Decide every ready, undecided match of a round that the human is not playing.

    Once the human is out of contention their undecided match is a walkover
    for the opponent.
    """
    _check_round(round_index)
    human = state.human_id
    matches: list[TournamentMatch] = []
    for match in state.rounds[round_index]:
        if match.is_decided or not match.is_ready:
            matches.append(match)
            continue
        if match.involves(human):
            if state.status == STATUS_ACTIVE:
                matches.append(match)
            else:
                matches.append(replace(match, winner_id=match.opponent_of(human)))
            continue
        result = simulate_match(match.player1_id, match.player2_id, context.strengths, rng)
        matches.append(replace(match, winner_id=result.winner_id))
    return state.with_round(round_index, matches)


def propagate_round(state: TournamentState, round_index: int, context: BracketContext) -> TournamentState:
    """Seat round ``round_index`` winners into the next round's slots."""
    _check_round(round_index)
    if round_index == LAST_ROUND:
        return state
    current = state.rounds[round_index]
    human = state.human_id
    advanced: list[TournamentMatch] = []
    for slot, match in enumerate(state.rounds[round_index + 1]):
        p1 = current[slot * 2].winner_id
        p2 = current[slot * 2 + 1].winner_id
        winner = match.winner_id if (p1, p2) == (match.player1_id, match.player2_id) else None
        profile = None
        if human is not None and human in (p1, p2):
            profile = context.profile_for(p2 if p1 == human else p1)
        advanced.append(replace(match, player1_id=p1, player2_id=p2, winner_id=winner, ai_profile_id=profile))
    return state.with_round(round_index + 1, advanced)


def drive_to_end(
    state: TournamentState,
    from_round: int,
    context: BracketContext,
    rng: random.Random,
) -> TournamentState:
    for round_index in range(from_round, LAST_ROUND + 1):
        state = resolve_round(state, round_index, context, rng)
        state = propagate_round(state, round_index, context)
    return state


def current_round(state: TournamentState) -> int | None:
    for round_index, matches in enumerate(state.rounds):
        if any(not match.is_decided for match in matches):
            return round_index
    return None


def pending_human_match(state: TournamentState) -> TournamentMatch | None:
    if state.status != STATUS_ACTIVE or state.human_id is None:
        return None
    for match in state.matches():
        if match.involves(state.human_id) and match.is_ready and not match.is_decided:
            return match
    return None


def _set_winner(state: TournamentState, target: TournamentMatch, winner_id: str | None) -> TournamentState:
    round_index = target.round - 1
    matches = [
        replace(match, winner_id=winner_id) if match.id == target.id else match
        for match in state.rounds[round_index]
    ]
    return state.with_round(round_index, matches)


def apply_human_result(
    state: TournamentState,
    human_won: bool,
    context: BracketContext,
    rng: random.Random,
) -> TournamentState:
    match = pending_human_match(state)
    if match is None:
        raise NoPendingMatchError(f"{state.tournament_id}: no human match is waiting for a result.")
    human = state.human_id
    round_index = match.round - 1
    winner = human if human_won else match.opponent_of(human)
    state = _set_winner(state, match, winner)

    if not human_won:
        _log.debug("%s: human lost in round %d.", state.tournament_id, match.round)
        return drive_to_end(state.with_status(STATUS_ELIMINATED), round_index, context, rng)
    if round_index == LAST_ROUND:
        return state.with_status(STATUS_CHAMPION)

    state = resolve_round(state, round_index, context, rng)
    state = propagate_round(state, round_index, context)
    state = resolve_round(state, round_index + 1, context, rng)
    return propagate_round(state, round_index + 1, context)


def forfeit(state: TournamentState, context: BracketContext, rng: random.Random) -> TournamentState:
    """Withdraw the human: their pending match is lost and the rest is simulated."""
    if state.status != STATUS_ACTIVE:
        return state
    start = current_round(state)
    state = state.with_status(STATUS_ELIMINATED)
    if start is None:
        return state
    _log.debug("%s: human withdrew in round %d.", state.tournament_id, start + 1)
    return drive_to_end(state, start, context, rng)


def furthest_round(state: TournamentState, player_id: str) -> int:
    """1-based round of the last match ``player_id`` appeared in (0 if absent)."""
    reached = 0
    for match in state.matches():
        if match.involves(player_id):
            reached = max(reached, match.round)
    return reached
