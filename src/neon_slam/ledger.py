from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Mapping

from .models import PlayerProfile, TournamentDefinition, TournamentState

_log = logging.getLogger("neon_slam.ledger")


def placement_credits(state: TournamentState, definition: TournamentDefinition) -> dict[str, int]:
    """Points each entrant holds for this tournament: a credit, not a delta.

    Losers of round r hold ``ranking_points[r-1]``; the champion holds the
    last entry.
    """
    credits: dict[str, int] = {}
    for match in state.matches():
        loser = match.loser_id
        if loser is not None:
            credits[loser] = int(definition.ranking_points[match.round - 1])
    champion = state.champion_id
    if champion is not None:
        credits[champion] = int(definition.champion_points)
    return credits


def apply_credits(
    players: Iterable[PlayerProfile],
    tournament_id: str,
    credits: Mapping[str, int],
) -> dict[str, int]:
    """Replace every player's credit for ``tournament_id`` and return the non-zero deltas.

    Players missing from ``credits`` now hold zero for the tournament, so
    re-applying the same credits never changes a total.
    """
    deltas: dict[str, int] = {}
    for player in players:
        new_credit = max(0, int(credits.get(player.id, 0)))
        old_credit = int(player.tournament_ranking_points.get(tournament_id, 0))
        delta = new_credit - old_credit
        if new_credit:
            player.tournament_ranking_points[tournament_id] = new_credit
        else:
            player.tournament_ranking_points.pop(tournament_id, None)
        if delta:
            player.ranking_points += delta
            deltas[player.id] = delta
    _log.debug("Applied %s credits: %d players changed.", tournament_id, len(deltas))
    return deltas


def apply_credit_batch(
    players: Iterable[PlayerProfile],
    credits_by_tournament: Mapping[str, Mapping[str, int]],
) -> dict[str, int]:
    roster = list(players)
    totals: dict[str, int] = {}
    for tournament_id, credits in credits_by_tournament.items():
        for player_id, delta in apply_credits(roster, tournament_id, credits).items():
            totals[player_id] = totals.get(player_id, 0) + delta
    return {pid: delta for pid, delta in totals.items() if delta}


def recompute_total(player: PlayerProfile) -> int:
    return sum(int(points) for points in player.tournament_ranking_points.values())


def mark_awarded(state: TournamentState) -> TournamentState:
    rounds = tuple(
        tuple(replace(match, ranking_awarded=True) if match.is_decided else match for match in matches)
        for matches in state.rounds
    )
    return replace(state, rounds=rounds)
