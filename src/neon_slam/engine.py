from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Mapping

from .config import WIN_PROBABILITY_CEILING, WIN_PROBABILITY_EXPONENT, WIN_PROBABILITY_FLOOR
from .models import PlayerProfile, ShopItem
from .stats import loadout_strength


@dataclass(frozen=True, slots=True)
class MatchResult:
    winner_id: str
    loser_id: str
    win_probability: float


def win_probability(strength_a: float, strength_b: float, exponent: float = WIN_PROBABILITY_EXPONENT) -> float:
    """Chance that side A beats side B.

    The linear share A/(A+B) is turned into odds and raised to ``exponent``,
    which stretches small stat edges into near-certain wins while keeping
    evenly matched players close to a coin flip.
    """
    if strength_a <= 0 and strength_b <= 0:
        return 0.5
    raw = strength_a / (strength_a + strength_b)
    raw = max(WIN_PROBABILITY_FLOOR, min(WIN_PROBABILITY_CEILING, raw))
    skewed = (raw / (1.0 - raw)) ** exponent
    return skewed / (1.0 + skewed)


def simulate_match(
    player_a: str,
    player_b: str,
    strengths: Mapping[str, float],
    rng: random.Random,
) -> MatchResult:
    prob = win_probability(strengths.get(player_a, 0.0), strengths.get(player_b, 0.0))
    if rng.random() < prob:
        return MatchResult(winner_id=player_a, loser_id=player_b, win_probability=prob)
    return MatchResult(winner_id=player_b, loser_id=player_a, win_probability=1.0 - prob)


def build_strength_table(players: Iterable[PlayerProfile], items: Mapping[str, ShopItem]) -> dict[str, float]:
    return {player.id: loadout_strength(player.loadout, items) for player in players}
