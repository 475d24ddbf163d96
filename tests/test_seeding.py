import random

from neon_slam.app import build_default_roster
from neon_slam.bracket import BracketContext
from neon_slam.catalog import build_calendar, item_index
from neon_slam.config import HUMAN_PLAYER_ID
from neon_slam.eligibility import seed_rank_table
from neon_slam.ledger import recompute_total
from neon_slam.models import TournamentDefinition
from neon_slam.seeding import fill_seeding_draw, seed_season


def _slam() -> TournamentDefinition:
    return next(d for d in build_calendar() if d.id == "melbourne-slam")


def test_seed_season_builds_opening_table() -> None:
    roster = build_default_roster()
    calendar = build_calendar()
    context = BracketContext.from_players(roster, item_index())
    summary = seed_season(roster, calendar, context, random.Random(3))

    assert len(summary.seeded) + len(summary.skipped) == len(calendar)
    assert summary.seeded
    human = next(p for p in roster if p.id == HUMAN_PLAYER_ID)
    assert human.ranking_points == 0
    assert human.tournament_ranking_points == {}
    assert HUMAN_PLAYER_ID not in summary.champions.values()
    assert all(recompute_total(p) == p.ranking_points for p in roster)
    assert sum(p.ranking_points for p in roster) > 0


def test_seeding_draw_widens_to_unused_players() -> None:
    roster = [p for p in build_default_roster() if not p.is_human]
    ranks = seed_rank_table(roster)
    used = {pid for pid, rank in ranks.items() if rank <= 20}

    assert fill_seeding_draw(_slam(), roster, ranks, used, random.Random(1), max_attempts=1) is None
    entrants = fill_seeding_draw(_slam(), roster, ranks, used, random.Random(1), max_attempts=2)
    assert entrants is not None
    assert len(set(entrants)) == 16
    assert not set(entrants) & used


def test_seeding_draw_gives_up_when_block_is_exhausted() -> None:
    roster = [p for p in build_default_roster() if not p.is_human]
    ranks = seed_rank_table(roster)
    used = {p.id for p in roster[:-10]}
    assert fill_seeding_draw(_slam(), roster, ranks, used, random.Random(1)) is None


def test_nobody_plays_twice_in_one_seeded_block() -> None:
    roster = build_default_roster()
    calendar = build_calendar()
    context = BracketContext.from_players(roster, item_index())
    summary = seed_season(roster, calendar, context, random.Random(8))

    assert set(summary.entrants_by_block) == {d.block for d in calendar if d.id in summary.seeded}
    for block, entrants in summary.entrants_by_block.items():
        assert len(entrants) == len(set(entrants)), f"block {block} reuses a player"
        assert HUMAN_PLAYER_ID not in entrants
    assert sum(len(e) for e in summary.entrants_by_block.values()) == 16 * len(summary.seeded)
