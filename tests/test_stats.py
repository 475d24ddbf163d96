import pytest

from neon_slam.catalog import DEFAULT_HUMAN_LOADOUT, item_index
from neon_slam.models import Loadout
from neon_slam.stats import loadout_strength, neutral_stats, resolve_stats, scale_stats, strength_total


def test_resolve_stats_reads_equipped_items() -> None:
    stats = resolve_stats(DEFAULT_HUMAN_LOADOUT, item_index())
    assert stats.serve_first == {"power": 45.0, "spin": 35.0, "control": 100.0, "shape": 40.0}
    assert stats.volley == {"control": 40.0, "accuracy": 40.0}
    assert stats.athleticism == {"speed": 40.0, "stamina": 45.0}


def test_unknown_item_falls_back_to_neutral_profile() -> None:
    raw = DEFAULT_HUMAN_LOADOUT.to_dict()
    raw["forehand"] = "missing-forehand"
    stats = resolve_stats(Loadout.from_dict(raw), item_index())
    assert stats == neutral_stats()
    assert all(value == 50.0 for block in stats.blocks() for value in block.values())


def test_neutral_strength_total() -> None:
    assert strength_total(neutral_stats()) == 1000.0


def test_scale_stats_multiplies_every_value() -> None:
    scaled = scale_stats(neutral_stats(), 1.1)
    assert scaled.forehand["power"] == pytest.approx(55.0)
    assert strength_total(scaled) == pytest.approx(1100.0)


def test_better_gear_is_stronger() -> None:
    items = item_index()
    elite = Loadout(
        serve_first="djokovic-serve",
        serve_second="serena-serve",
        forehand="nadal-forehand",
        backhand="sinner-backhand",
        volley="federer-volley",
        athleticism="murray-athleticism",
    )
    assert loadout_strength(elite, items) > loadout_strength(DEFAULT_HUMAN_LOADOUT, items)
