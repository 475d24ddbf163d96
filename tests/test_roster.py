from neon_slam.app import DEFAULT_AI_PLAYERS, build_default_roster, format_block_report, format_rankings
from neon_slam.blocks import BlockReport, BlockSummaryRow
from neon_slam.catalog import AI_PROFILES, SHOP_ITEMS, block_dates, build_calendar, item_index
from neon_slam.config import BLOCKS_PER_SEASON, HUMAN_PLAYER_ID
from neon_slam.models import LOADOUT_SLOTS


def test_default_roster_shape() -> None:
    roster = build_default_roster()
    assert len(roster) == DEFAULT_AI_PLAYERS + 1
    assert len({p.id for p in roster}) == len(roster)
    assert len({p.name for p in roster}) == len(roster)
    human = roster[-1]
    assert human.id == HUMAN_PLAYER_ID and human.is_human
    assert sorted(p.seed_ranking for p in roster if not p.is_human) == list(range(1, DEFAULT_AI_PLAYERS + 1))
    profiles = {profile.id for profile in AI_PROFILES}
    assert all(p.ai_profile_id in profiles for p in roster if not p.is_human)


def test_roster_loadouts_use_catalog_items() -> None:
    items = item_index()
    for player in build_default_roster():
        for slot, item_id in player.loadout.slot_items():
            assert slot in LOADOUT_SLOTS
            assert items[item_id].fits_slot(slot)


def test_roster_is_deterministic_per_seed() -> None:
    first = build_default_roster(seed=3)
    second = build_default_roster(seed=3)
    assert [(p.name, p.loadout) for p in first] == [(p.name, p.loadout) for p in second]


def test_catalog_covers_the_season() -> None:
    assert len(SHOP_ITEMS) == 40
    assert len(AI_PROFILES) == 6
    calendar = build_calendar()
    assert {d.block for d in calendar} == set(range(1, BLOCKS_PER_SEASON + 1))
    assert len({d.id for d in calendar}) == len(calendar)
    slams = [d for d in calendar if d.category == "grand-slam"]
    assert len(slams) == 4
    start, end = block_dates(2)
    assert (end - start).days == 13
    assert start.isoformat() == "2026-01-19"


def test_text_formatters() -> None:
    roster = build_default_roster(ai_players=5)
    table = format_rankings(roster, limit=3)
    assert len(table.splitlines()) == 4
    report = BlockReport(
        block=4,
        rows=[BlockSummaryRow(id="a", name="Ann Lee", rank_before=2, rank_after=1, block_points=30, delta_points=25, points_after=90)],
    )
    text = format_block_report(report)
    assert text.splitlines()[0] == "Block 4 results"
    assert "+25" in text
