from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

from .bracket import BracketContext, build_tournament
from .config import HUMAN_PLAYER_ID
from .eligibility import rank_table
from .errors import InsufficientFieldError, TournamentInProgressError
from .ledger import apply_credit_batch, mark_awarded, placement_credits
from .models import STATUS_ACTIVE, PlayerProfile, TournamentDefinition, TournamentState

_log = logging.getLogger("neon_slam.blocks")


@dataclass(frozen=True, slots=True)
class BlockSummaryRow:
    id: str
    name: str
    rank_before: int
    rank_after: int
    block_points: int
    delta_points: int
    points_after: int


@dataclass(slots=True)
class BlockReport:
    block: int
    rows: list[BlockSummaryRow]
    tournaments: dict[str, TournamentState] = field(default_factory=dict)
    champions: dict[str, str] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)

    def row_for(self, player_id: str) -> BlockSummaryRow | None:
        for row in self.rows:
            if row.id == player_id:
                return row
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "block": self.block,
            "rows": [asdict(row) for row in self.rows],
            "champions": dict(self.champions),
            "skipped": list(self.skipped),
        }


def block_definitions(definitions: Iterable[TournamentDefinition], block: int) -> list[TournamentDefinition]:
    return [d for d in definitions if d.block == block]


def _synthetic_draw(
    definition: TournamentDefinition,
    roster: list[PlayerProfile],
    ranks: dict[str, int],
    context: BracketContext,
    rng: random.Random,
    used: set[str],
    human_id: str,
) -> TournamentState:
    try:
        return build_tournament(definition, roster, ranks, context, rng, exclude_ids={human_id, *used})
    except InsufficientFieldError:
        # Players already drawn elsewhere this block may double up rather than lose the event.
        return build_tournament(definition, roster, ranks, context, rng, exclude_ids={human_id})


def finalize_block(
    block: int,
    players: Iterable[PlayerProfile],
    definitions: Iterable[TournamentDefinition],
    last_resolved_block: int,
    context: BracketContext,
    rng: random.Random,
    played: TournamentState | None = None,
    human_id: str = HUMAN_PLAYER_ID,
) -> BlockReport | None:
    """Settle every tournament of ``block`` once and report the ranking movement.

    Returns ``None`` when the block is already at or below the watermark. The
    caller advances its watermark to ``report.block``.
    """
    if block <= last_resolved_block:
        _log.debug("Block %d already resolved (watermark %d).", block, last_resolved_block)
        return None
    if played is not None and played.status == STATUS_ACTIVE:
        raise TournamentInProgressError(f"{played.tournament_id} is still in progress.")

    roster = list(players)
    ranks_before = rank_table(roster)
    points_before = {p.id: p.ranking_points for p in roster}

    states: dict[str, TournamentState] = {}
    credits: dict[str, dict[str, int]] = {}
    skipped: list[str] = []
    used: set[str] = set(played.entrants) if played is not None else set()
    for definition in block_definitions(definitions, block):
        if played is not None and played.tournament_id == definition.id:
            state = played
        else:
            try:
                state = _synthetic_draw(definition, roster, ranks_before, context, rng, used, human_id)
            except InsufficientFieldError as exc:
                _log.warning("Block %d: skipping %s (%s)", block, definition.id, exc)
                skipped.append(definition.id)
                continue
            used.update(state.entrants)
        states[definition.id] = state
        credits[definition.id] = placement_credits(state, definition)

    apply_credit_batch(roster, credits)

    champions: dict[str, str] = {}
    by_id = {p.id: p for p in roster}
    for tournament_id, state in states.items():
        champion = state.champion_id
        if champion is not None and champion in by_id:
            wins = by_id[champion].tournament_wins
            wins[tournament_id] = wins.get(tournament_id, 0) + 1
            champions[tournament_id] = champion
        states[tournament_id] = mark_awarded(state)

    ranks_after = rank_table(roster)
    rows = [
        BlockSummaryRow(
            id=p.id,
            name=p.name,
            rank_before=ranks_before[p.id],
            rank_after=ranks_after[p.id],
            block_points=sum(credits[tid].get(p.id, 0) for tid in credits),
            delta_points=p.ranking_points - points_before[p.id],
            points_after=p.ranking_points,
        )
        for p in roster
    ]
    rows.sort(key=lambda row: row.rank_after)
    _log.info("Block %d finalized: %d tournaments, %d skipped.", block, len(states), len(skipped))
    return BlockReport(block=block, rows=rows, tournaments=states, champions=champions, skipped=skipped)
