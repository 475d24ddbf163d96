from __future__ import annotations

import random
from typing import Iterable

from .blocks import BlockReport
from .catalog import AI_PROFILES, DEFAULT_HUMAN_LOADOUT, item_index, items_for
from .config import HUMAN_PLAYER_ID
from .eligibility import rank_order
from .models import LOADOUT_SLOTS, Loadout, PlayerProfile
from .names import NameGenerator
from .stats import loadout_strength

DEFAULT_AI_PLAYERS = 127

# (share of slots, item tier) by target seed position; stronger players draw better gear.
_TIER_PLANS: tuple[tuple[int, list[tuple[float, str]]], ...] = (
    (10, [(0.60, "special"), (0.40, "elite")]),
    (40, [(0.10, "special"), (0.70, "elite"), (0.20, "pro")]),
    (90, [(0.10, "elite"), (0.75, "pro"), (0.15, "amateur")]),
    (10_000, [(0.30, "pro"), (0.70, "amateur")]),
)

_SLOT_SHOTS: dict[str, str] = {
    "serve_first": "serve",
    "serve_second": "serve",
    "forehand": "forehand",
    "backhand": "backhand",
    "volley": "volley",
    "athleticism": "athleticism",
}


def _sample_tier(rng: random.Random, plan: list[tuple[float, str]]) -> str:
    roll = rng.random()
    cumulative = 0.0
    for weight, tier in plan:
        cumulative += weight
        if roll <= cumulative:
            return tier
    return plan[-1][1]


def _plan_for(position: int) -> list[tuple[float, str]]:
    for cutoff, plan in _TIER_PLANS:
        if position <= cutoff:
            return plan
    return _TIER_PLANS[-1][1]


def _make_loadout(rng: random.Random, position: int) -> Loadout:
    plan = _plan_for(position)
    picks: dict[str, str] = {}
    for slot in LOADOUT_SLOTS:
        options = items_for(_SLOT_SHOTS[slot], _sample_tier(rng, plan))
        if slot == "serve_second":
            options = [item for item in options if item.id != picks["serve_first"]] or options
        picks[slot] = rng.choice(options).id
    return Loadout(**picks)


def build_default_roster(
    ai_players: int = DEFAULT_AI_PLAYERS,
    human_name: str = "You",
    seed: int = 7,
) -> list[PlayerProfile]:
    """AI tour plus the human; seed rankings follow loadout strength."""
    rng = random.Random(f"roster:{seed}:{ai_players}")
    name_gen = NameGenerator(seed=seed)
    name_gen.reserve([human_name])
    items = item_index()

    roster: list[PlayerProfile] = []
    for position in range(1, ai_players + 1):
        roster.append(
            PlayerProfile(
                id=f"ai-{position:03d}",
                name=name_gen.next_name(),
                loadout=_make_loadout(rng, position),
                ai_profile_id=rng.choice(AI_PROFILES).id,
            )
        )

    ordered = sorted(roster, key=lambda p: (-loadout_strength(p.loadout, items), p.name))
    for seed_rank, player in enumerate(ordered, start=1):
        player.seed_ranking = seed_rank

    roster.append(
        PlayerProfile(
            id=HUMAN_PLAYER_ID,
            name=human_name,
            loadout=Loadout(**DEFAULT_HUMAN_LOADOUT.to_dict()),
            is_human=True,
        )
    )
    return roster


def format_rankings(players: Iterable[PlayerProfile], limit: int = 20) -> str:
    lines = ["Rank Player                    Pts  Titles"]
    for idx, player in enumerate(rank_order(players)[:limit], start=1):
        marker = "*" if player.is_human else " "
        lines.append(f"{idx:>4}{marker}{player.name:<24} {player.ranking_points:>5} {player.titles:>6}")
    return "\n".join(lines)


def format_block_report(report: BlockReport, limit: int = 20) -> str:
    lines = [f"Block {report.block} results", "Rank  Prev Player                   Block  Delta   Pts"]
    for row in report.rows[:limit]:
        lines.append(
            f"{row.rank_after:>4} {row.rank_before:>5} {row.name:<24} {row.block_points:>5}"
            f" {row.delta_points:>+6} {row.points_after:>5}"
        )
    return "\n".join(lines)
