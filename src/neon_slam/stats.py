from __future__ import annotations

import logging
from typing import Mapping

from .config import NEUTRAL_STAT_VALUE
from .models import LOADOUT_SLOTS, Loadout, PlayerStats, ShopItem, StatBlock

_log = logging.getLogger("neon_slam.stats")

# Stat names each slot carries when no item can be resolved.
_SLOT_STAT_NAMES: dict[str, tuple[str, ...]] = {
    "serve_first": ("power", "spin", "control", "shape"),
    "serve_second": ("power", "spin", "control", "shape"),
    "forehand": ("power", "spin", "control", "shape"),
    "backhand": ("power", "spin", "control", "shape"),
    "volley": ("control", "accuracy"),
    "athleticism": ("speed", "stamina"),
}


def neutral_stats() -> PlayerStats:
    return PlayerStats(
        **{slot: {name: float(NEUTRAL_STAT_VALUE) for name in _SLOT_STAT_NAMES[slot]} for slot in LOADOUT_SLOTS}
    )


def resolve_stats(loadout: Loadout, items: Mapping[str, ShopItem]) -> PlayerStats:
    """Look up every equipped item; any miss yields the neutral profile as a whole."""
    blocks: dict[str, StatBlock] = {}
    for slot, item_id in loadout.slot_items():
        item = items.get(item_id)
        if item is None:
            _log.debug("Unresolvable item %r in slot %s; using neutral stats.", item_id, slot)
            return neutral_stats()
        blocks[slot] = {name: float(value) for name, value in item.stats.items()}
    return PlayerStats(**blocks)


def strength_total(stats: PlayerStats) -> float:
    return float(sum(value for block in stats.blocks() for value in block.values()))


def scale_stats(stats: PlayerStats, factor: float) -> PlayerStats:
    return PlayerStats(
        **{slot: {name: round(value * factor, 2) for name, value in getattr(stats, slot).items()} for slot in LOADOUT_SLOTS}
    )


def loadout_strength(loadout: Loadout, items: Mapping[str, ShopItem]) -> float:
    return strength_total(resolve_stats(loadout, items))
