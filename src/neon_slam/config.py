"""Static tuning constants for the career engine."""

from datetime import date

HUMAN_PLAYER_ID = "player"

BRACKET_SIZE = 16
ROUND_SIZES: tuple[int, ...] = (8, 4, 2, 1)
ROUND_LABELS: tuple[str, ...] = ("Round of 16", "Quarterfinals", "Semifinals", "Final")

# Odds are raised to this power so clear favourites win almost always.
WIN_PROBABILITY_EXPONENT = 7
WIN_PROBABILITY_FLOOR = 0.001
WIN_PROBABILITY_CEILING = 0.999

NEUTRAL_STAT_VALUE = 50

# Rank window (inclusive) AI players must sit in to fill a draw of each category.
CATEGORY_RANK_BANDS: dict[str, tuple[int, int | None]] = {
    "itf": (64, 117),
    "pro": (32, 80),
    "elite": (1, 64),
    "grand-slam": (1, 32),
}

TIER_STAT_SCALE: dict[str, float] = {
    "amateur": 0.90,
    "pro": 1.00,
    "elite": 1.10,
}

SURFACES: tuple[str, ...] = ("grass", "clay", "hardcourt")

BLOCKS_PER_SEASON = 26
BLOCK_LENGTH_DAYS = 14
SEASON_START = date(2026, 1, 5)

STARTING_CREDITS = 300

# Pool widening stages tried per seeding tournament before it is skipped.
SEED_FILL_MAX_ATTEMPTS = 2
