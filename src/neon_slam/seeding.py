from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable

from .bracket import BracketContext, create_tournament, draw_field
from .config import BRACKET_SIZE, SEED_FILL_MAX_ATTEMPTS
from .eligibility import seed_rank_table
from .errors import InsufficientFieldError
from .ledger import apply_credits, placement_credits
from .models import PlayerProfile, TournamentDefinition

_log = logging.getLogger("neon_slam.seeding")

# Bigger events draw first so the strongest players land where they belong.
_CATEGORY_DRAW_ORDER = {"grand-slam": 0, "elite": 1, "pro": 2, "itf": 3}


@dataclass(slots=True)
class SeedingSummary:
    seeded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    champions: dict[str, str] = field(default_factory=dict)
    entrants_by_block: dict[int, list[str]] = field(default_factory=dict)


def _recycled_draw(
    definition: TournamentDefinition,
    players: list[PlayerProfile],
    used: set[str],
    rng: random.Random,
) -> list[str]:
    pool = [p.id for p in players if p.id not in used]
    if len(pool) < BRACKET_SIZE:
        raise InsufficientFieldError(definition.id, len(pool), BRACKET_SIZE)
    rng.shuffle(pool)
    return pool[:BRACKET_SIZE]


def fill_seeding_draw(
    definition: TournamentDefinition,
    players: list[PlayerProfile],
    ranks: dict[str, int],
    used: set[str],
    rng: random.Random,
    max_attempts: int = SEED_FILL_MAX_ATTEMPTS,
) -> list[str] | None:
    """Entrants for one seeding tournament, never reusing a player from the same block.

    Attempt 1 is the regular banded draw. Attempt 2 recycles every AI player
    not yet used this block, regardless of band or gate. ``None`` means the
    tournament is skipped.
    """
    stages = (
        lambda: draw_field(definition, players, ranks, rng, exclude_ids=used, check_points=False),
        lambda: _recycled_draw(definition, players, used, rng),
    )
    for attempt, stage in enumerate(stages[: max(0, max_attempts)], start=1):
        try:
            return stage()
        except InsufficientFieldError as exc:
            _log.debug("Seeding %s attempt %d failed: %s", definition.id, attempt, exc)
    return None


def seed_season(
    players: Iterable[PlayerProfile],
    definitions: Iterable[TournamentDefinition],
    context: BracketContext,
    rng: random.Random,
    max_attempts: int = SEED_FILL_MAX_ATTEMPTS,
) -> SeedingSummary:
    """Play the whole calendar once with AI players to build the opening ranking table.

    Draws use the static seed rankings; the human never takes part.
    """
    roster = list(players)
    ai_players = [p for p in roster if not p.is_human]
    ranks = seed_rank_table(ai_players)
    summary = SeedingSummary()

    by_block: dict[int, list[TournamentDefinition]] = {}
    for definition in definitions:
        by_block.setdefault(definition.block, []).append(definition)

    for block in sorted(by_block):
        used: set[str] = set()
        ordered = sorted(by_block[block], key=lambda d: (_CATEGORY_DRAW_ORDER.get(d.category, 9), d.id))
        for definition in ordered:
            entrants = fill_seeding_draw(definition, ai_players, ranks, used, rng, max_attempts)
            if entrants is None:
                _log.warning("Seeding skipped %s: not enough unused players in block %d.", definition.id, block)
                summary.skipped.append(definition.id)
                continue
            used.update(entrants)
            summary.entrants_by_block.setdefault(block, []).extend(entrants)
            state = create_tournament(definition, entrants, context, rng)
            apply_credits(roster, definition.id, placement_credits(state, definition))
            summary.seeded.append(definition.id)
            if state.champion_id is not None:
                summary.champions[definition.id] = state.champion_id

    _log.info("Season seeded: %d tournaments, %d skipped.", len(summary.seeded), len(summary.skipped))
    return summary
