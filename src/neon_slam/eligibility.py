from __future__ import annotations

from typing import Iterable, Mapping

from .config import CATEGORY_RANK_BANDS
from .models import PlayerProfile, TournamentDefinition


def rank_order(players: Iterable[PlayerProfile]) -> list[PlayerProfile]:
    return sorted(players, key=lambda p: (-p.ranking_points, p.name))


def rank_table(players: Iterable[PlayerProfile]) -> dict[str, int]:
    return {player.id: idx for idx, player in enumerate(rank_order(players), start=1)}


def seed_rank_table(players: Iterable[PlayerProfile]) -> dict[str, int]:
    ordered = sorted(players, key=lambda p: (p.seed_ranking <= 0, p.seed_ranking, p.name))
    return {player.id: idx for idx, player in enumerate(ordered, start=1)}


def is_eligible(definition: TournamentDefinition, rank: int, points: int | None) -> bool:
    """Check the ranking gate; ``points=None`` skips the minimum-points rule."""
    gate = definition.ranking_gate
    if points is None:
        return gate.max_rank is None or rank <= gate.max_rank
    return gate.admits(rank, points)


def in_category_band(category: str, rank: int) -> bool:
    low, high = CATEGORY_RANK_BANDS.get(category, (1, None))
    if rank < low:
        return False
    return high is None or rank <= high


def eligible_players(
    definition: TournamentDefinition,
    players: Iterable[PlayerProfile],
    ranks: Mapping[str, int],
    check_points: bool = True,
) -> list[PlayerProfile]:
    return [
        player
        for player in players
        if player.id in ranks
        and is_eligible(definition, ranks[player.id], player.ranking_points if check_points else None)
    ]


def field_pool(
    definition: TournamentDefinition,
    players: Iterable[PlayerProfile],
    ranks: Mapping[str, int],
    check_points: bool = True,
) -> list[PlayerProfile]:
    """Gate-eligible AI players whose rank also sits inside the category band."""
    return [
        player
        for player in eligible_players(definition, players, ranks, check_points)
        if not player.is_human and in_category_band(definition.category, ranks[player.id])
    ]
