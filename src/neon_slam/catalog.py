"""Static game data: shop items, AI behaviour profiles and the season calendar."""

from __future__ import annotations

from datetime import date, timedelta

from .config import BLOCK_LENGTH_DAYS, SEASON_START
from .models import AiProfile, Loadout, RankingGate, ShopItem, TournamentDefinition


def _item(item_id: str, player: str, shot: str, tier: str, price: int, perk: str | None = None, **stats: float) -> ShopItem:
    return ShopItem(id=item_id, player=player, shot=shot, stats=dict(stats), price=price, tier=tier, perk=perk)


SHOP_ITEMS: tuple[ShopItem, ...] = (
    _item("amateur-serve-1", "Amateur", "serve", "amateur", 0, power=45, spin=35, control=100, shape=40),
    _item("amateur-serve-2", "Amateur", "serve", "amateur", 20, power=55, spin=45, control=45, shape=40),
    _item("amateur-forehand-1", "Amateur", "forehand", "amateur", 20, power=45, spin=40, control=35, shape=35),
    _item("amateur-forehand-2", "Amateur", "forehand", "amateur", 40, power=40, spin=45, control=20, shape=40),
    _item("amateur-backhand-1", "Amateur", "backhand", "amateur", 20, power=35, spin=35, control=20, shape=35),
    _item("amateur-backhand-2", "Amateur", "backhand", "amateur", 40, power=30, spin=50, control=40, shape=40),
    _item("amateur-volley-1", "Amateur", "volley", "amateur", 20, control=40, accuracy=40),
    _item("amateur-volley-2", "Amateur", "volley", "amateur", 40, control=48, accuracy=45),
    _item("amateur-athleticism-1", "Amateur", "athleticism", "amateur", 20, speed=40, stamina=45),
    _item("amateur-athleticism-2", "Amateur", "athleticism", "amateur", 40, speed=45, stamina=50),
    _item("hurkacz-serve", "Hurkacz", "serve", "pro", 180, power=80, spin=55, control=70, shape=45),
    _item("berrettini-serve", "Berrettini", "serve", "pro", 200, power=85, spin=45, control=65, shape=45),
    _item("fritz-forehand", "Fritz", "forehand", "pro", 220, power=78, spin=60, control=72, shape=55),
    _item("de-minaur-forehand", "De Minaur", "forehand", "pro", 220, power=72, spin=65, control=78, shape=60),
    _item("dimitrov-backhand", "Dimitrov", "backhand", "pro", 220, power=70, spin=70, control=80, shape=55),
    _item("musetti-backhand", "Musetti", "backhand", "pro", 220, power=68, spin=75, control=76, shape=60),
    _item("kasatkina-volley", "Kasatkina", "volley", "pro", 200, control=75, accuracy=72),
    _item("badosa-volley", "Badosa", "volley", "pro", 200, control=78, accuracy=70),
    _item("svitolina-athleticism", "Svitolina", "athleticism", "pro", 200, speed=70, stamina=78),
    _item("tiafoe-athleticism", "Tiafoe", "athleticism", "pro", 200, speed=72, stamina=70),
    _item("djokovic-serve", "Djokovic", "serve", "elite", 360, power=95, spin=70, control=90, shape=50),
    _item("serena-serve", "Serena", "serve", "elite", 380, power=100, spin=60, control=88, shape=50),
    _item("nadal-forehand", "Nadal", "forehand", "elite", 380, power=85, spin=100, control=82, shape=80),
    _item("alcaraz-forehand", "Alcaraz", "forehand", "elite", 380, power=90, spin=92, control=88, shape=70),
    _item("sinner-backhand", "Sinner", "backhand", "elite", 380, power=88, spin=80, control=90, shape=65),
    _item("swiatek-backhand", "Swiatek", "backhand", "elite", 380, power=82, spin=85, control=92, shape=70),
    _item("federer-volley", "Federer", "volley", "elite", 360, control=110, accuracy=92),
    _item("barty-volley", "Barty", "volley", "elite", 350, control=105, accuracy=90),
    _item("murray-athleticism", "Murray", "athleticism", "elite", 360, speed=85, stamina=90),
    _item("sabalenka-athleticism", "Sabalenka", "athleticism", "elite", 360, speed=88, stamina=82),
    _item("special-djokovic-serve", "Djokovic", "serve", "special", 520,
          "Return vision: slightly slower serve timer for the opponent.", power=102, spin=75, control=95, shape=55),
    _item("special-serena-serve", "Serena", "serve", "special", 520,
          "Ace pressure: minor bonus to serve speed in clutch points.", power=110, spin=65, control=92, shape=55),
    _item("special-nadal-forehand", "Nadal", "forehand", "special", 560,
          "Heavy topspin: forces deeper opponent positioning.", power=92, spin=115, control=88, shape=90),
    _item("special-alcaraz-forehand", "Alcaraz", "forehand", "special", 560,
          "Change-up: occasional timing forgiveness boost.", power=95, spin=100, control=92, shape=85),
    _item("special-medvedev-backhand", "Medvedev", "backhand", "special", 560,
          "Depth control: tighter bounce variance.", power=90, spin=85, control=98, shape=75),
    _item("special-swiatek-backhand", "Swiatek", "backhand", "special", 560,
          "Counterpunch: slight speed boost on stretched hits.", power=88, spin=90, control=98, shape=80),
    _item("special-federer-volley", "Federer", "volley", "special", 520,
          "Soft hands: reduces volley timing sensitivity.", control=125, accuracy=98),
    _item("special-henin-volley", "Henin", "volley", "special", 520,
          "Knife touch: drop volleys slow down more.", control=120, accuracy=94),
    _item("special-halep-athleticism", "Halep", "athleticism", "special", 520,
          "Endurance: stamina decay reduced slightly.", speed=92, stamina=96),
    _item("special-murray-athleticism", "Murray", "athleticism", "special", 520,
          "Grinding: speed loss per rally hit reduced.", speed=90, stamina=98),
)

DEFAULT_HUMAN_LOADOUT = Loadout(
    serve_first="amateur-serve-1",
    serve_second="amateur-serve-2",
    forehand="amateur-forehand-1",
    backhand="amateur-backhand-1",
    volley="amateur-volley-1",
    athleticism="amateur-athleticism-1",
)

AI_PROFILES: tuple[AiProfile, ...] = (
    AiProfile(
        id="defensive-baseliner",
        name="Defensive Baseliner",
        description="Stays deep, absorbs pace, mixes targets evenly.",
        loadout=Loadout("hurkacz-serve", "berrettini-serve", "de-minaur-forehand", "dimitrov-backhand",
                        "kasatkina-volley", "svitolina-athleticism"),
        away_bias=0.5,
        home_y=12,
        drop_shot_chance=0.1,
    ),
    AiProfile(
        id="aggressive-shotmaker",
        name="Aggressive Shotmaker",
        description="Rips angles and likes the drop shot.",
        loadout=Loadout("djokovic-serve", "serena-serve", "alcaraz-forehand", "sinner-backhand",
                        "federer-volley", "sabalenka-athleticism"),
        away_bias=0.8,
        home_y=16,
        drop_shot_chance=0.3,
    ),
    AiProfile(
        id="serve-volleyer",
        name="Serve & Volleyer",
        description="Charges the net and goes away from you.",
        loadout=Loadout("special-serena-serve", "djokovic-serve", "special-nadal-forehand",
                        "special-medvedev-backhand", "special-federer-volley", "special-murray-athleticism"),
        away_bias=0.75,
        home_y=72,
        drop_shot_chance=0.1,
    ),
    AiProfile(
        id="counterpuncher",
        name="Counterpuncher",
        description="Absorbs pace, redirects, and waits for errors.",
        loadout=Loadout("berrettini-serve", "hurkacz-serve", "fritz-forehand", "swiatek-backhand",
                        "barty-volley", "murray-athleticism"),
        away_bias=0.4,
        home_y=18,
        drop_shot_chance=0.05,
    ),
    AiProfile(
        id="power-server",
        name="Power Server",
        description="Big serves and flat drives to shorten points.",
        loadout=Loadout("special-serena-serve", "djokovic-serve", "special-alcaraz-forehand",
                        "special-medvedev-backhand", "special-federer-volley", "tiafoe-athleticism"),
        away_bias=0.6,
        home_y=24,
        drop_shot_chance=0.08,
    ),
    AiProfile(
        id="all-court-artist",
        name="All-Court Artist",
        description="Mixes spins, angles, and net approaches.",
        loadout=Loadout("djokovic-serve", "serena-serve", "nadal-forehand", "sinner-backhand",
                        "special-henin-volley", "special-halep-athleticism"),
        away_bias=0.55,
        home_y=40,
        drop_shot_chance=0.18,
    ),
)

# category -> (tier, prizes per round reached, champion bonus, ranking points, gate)
CATEGORY_TERMS: dict[str, tuple[str, tuple[int, ...], int, tuple[int, ...], RankingGate]] = {
    "itf": ("amateur", (20, 35, 60, 90), 40, (1, 4, 8, 14, 25), RankingGate()),
    "pro": ("pro", (60, 110, 180, 280), 150, (10, 25, 50, 100, 200), RankingGate(max_rank=100)),
    "elite": ("elite", (140, 260, 420, 650), 350, (45, 90, 180, 300, 500), RankingGate(max_rank=64)),
    "grand-slam": ("elite", (250, 450, 750, 1200), 800, (90, 180, 360, 650, 1000), RankingGate(max_rank=32)),
}

CATEGORY_DESCRIPTIONS: dict[str, str] = {
    "itf": "ITF Futures & rising prospects",
    "pro": "Tour 250-500 level event",
    "elite": "Masters 1000 level event",
    "grand-slam": "Two weeks, best of the best",
}

# (block, id, name, category, surface)
CALENDAR: tuple[tuple[int, str, str, str, str], ...] = (
    (1, "brisbane-futures", "Brisbane Futures", "itf", "hardcourt"),
    (1, "adelaide-international", "Adelaide International", "pro", "hardcourt"),
    (2, "auckland-futures", "Auckland Futures", "itf", "hardcourt"),
    (2, "melbourne-slam", "Melbourne Slam", "grand-slam", "hardcourt"),
    (3, "montpellier-futures", "Montpellier Futures", "itf", "hardcourt"),
    (3, "rotterdam-indoors", "Rotterdam Indoors", "pro", "hardcourt"),
    (4, "santiago-futures", "Santiago Futures", "itf", "clay"),
    (4, "buenos-aires-open", "Buenos Aires Open", "pro", "clay"),
    (4, "doha-masters", "Doha Masters", "elite", "hardcourt"),
    (5, "acapulco-futures", "Acapulco Futures", "itf", "hardcourt"),
    (5, "marseille-open", "Marseille Open", "pro", "hardcourt"),
    (5, "dubai-championships", "Dubai Championships", "elite", "hardcourt"),
    (6, "monterrey-futures", "Monterrey Futures", "itf", "hardcourt"),
    (6, "desert-masters", "Desert Masters", "elite", "hardcourt"),
    (7, "miami-futures", "Miami Futures", "itf", "hardcourt"),
    (7, "houston-clay-open", "Houston Clay Open", "pro", "clay"),
    (7, "key-biscayne-masters", "Key Biscayne Masters", "elite", "hardcourt"),
    (8, "marrakech-futures", "Marrakech Futures", "itf", "clay"),
    (8, "estoril-open", "Estoril Open", "pro", "clay"),
    (8, "monte-carlo-masters", "Monte Carlo Masters", "elite", "clay"),
    (9, "antalya-futures", "Antalya Futures", "itf", "clay"),
    (9, "barcelona-open", "Barcelona Open", "pro", "clay"),
    (9, "madrid-masters", "Madrid Masters", "elite", "clay"),
    (10, "munich-futures", "Munich Futures", "itf", "clay"),
    (10, "geneva-open", "Geneva Open", "pro", "clay"),
    (10, "rome-masters", "Rome Masters", "elite", "clay"),
    (11, "bucharest-futures", "Bucharest Futures", "itf", "clay"),
    (11, "paris-clay-slam", "Paris Clay Slam", "grand-slam", "clay"),
    (12, "nottingham-futures", "Nottingham Futures", "itf", "grass"),
    (12, "stuttgart-grass-open", "Stuttgart Grass Open", "pro", "grass"),
    (12, "halle-open", "Halle Open", "elite", "grass"),
    (13, "ilkley-futures", "Ilkley Futures", "itf", "grass"),
    (13, "london-grass-slam", "London Grass Slam", "grand-slam", "grass"),
    (14, "newport-futures", "Newport Futures", "itf", "grass"),
    (14, "bastad-open", "Bastad Open", "pro", "clay"),
    (15, "gstaad-futures", "Gstaad Futures", "itf", "clay"),
    (15, "hamburg-open", "Hamburg Open", "pro", "clay"),
    (15, "atlanta-open", "Atlanta Open", "pro", "hardcourt"),
    (16, "toronto-futures", "Toronto Futures", "itf", "hardcourt"),
    (16, "canadian-masters", "Canadian Masters", "elite", "hardcourt"),
    (17, "winston-salem-futures", "Winston-Salem Futures", "itf", "hardcourt"),
    (17, "cincinnati-masters", "Cincinnati Masters", "elite", "hardcourt"),
    (18, "lexington-futures", "Lexington Futures", "itf", "hardcourt"),
    (18, "new-york-slam", "New York Slam", "grand-slam", "hardcourt"),
    (19, "seville-futures", "Seville Futures", "itf", "clay"),
    (19, "chengdu-open", "Chengdu Open", "pro", "hardcourt"),
    (20, "tokyo-futures", "Tokyo Futures", "itf", "hardcourt"),
    (20, "beijing-open", "Beijing Open", "pro", "hardcourt"),
    (21, "shenzhen-futures", "Shenzhen Futures", "itf", "hardcourt"),
    (21, "shanghai-masters", "Shanghai Masters", "elite", "hardcourt"),
    (22, "antwerp-futures", "Antwerp Futures", "itf", "hardcourt"),
    (22, "stockholm-open", "Stockholm Open", "pro", "hardcourt"),
    (22, "vienna-indoors", "Vienna Indoors", "pro", "hardcourt"),
    (23, "charlottesville-futures", "Charlottesville Futures", "itf", "hardcourt"),
    (23, "paris-indoor-masters", "Paris Indoor Masters", "elite", "hardcourt"),
    (24, "knoxville-futures", "Knoxville Futures", "itf", "hardcourt"),
    (24, "metz-open", "Metz Open", "pro", "hardcourt"),
    (25, "maia-futures", "Maia Futures", "itf", "clay"),
    (25, "champions-cup", "Champions Cup", "elite", "hardcourt"),
    (26, "year-end-futures", "Year-End Futures", "itf", "hardcourt"),
    (26, "winter-classic", "Winter Classic", "pro", "hardcourt"),
)

# Invitation events that tighten the standard category gate.
GATE_OVERRIDES: dict[str, RankingGate] = {
    "champions-cup": RankingGate(max_rank=32, min_points=100),
}


def item_index(items: tuple[ShopItem, ...] = SHOP_ITEMS) -> dict[str, ShopItem]:
    return {item.id: item for item in items}


def profile_index(profiles: tuple[AiProfile, ...] = AI_PROFILES) -> dict[str, AiProfile]:
    return {profile.id: profile for profile in profiles}


def items_for(shot: str, tier: str) -> list[ShopItem]:
    return [item for item in SHOP_ITEMS if item.shot == shot and item.tier == tier]


def build_calendar() -> list[TournamentDefinition]:
    definitions: list[TournamentDefinition] = []
    for block, tournament_id, name, category, surface in CALENDAR:
        tier, prizes, bonus, points, gate = CATEGORY_TERMS[category]
        definitions.append(
            TournamentDefinition(
                id=tournament_id,
                name=name,
                category=category,
                tier=tier,
                surface=surface,
                block=block,
                prizes=prizes,
                ranking_points=points,
                ranking_gate=GATE_OVERRIDES.get(tournament_id, gate),
                champion_bonus=bonus,
                description=CATEGORY_DESCRIPTIONS[category],
            )
        )
    return definitions


def block_dates(block: int) -> tuple[date, date]:
    start = SEASON_START + timedelta(days=(block - 1) * BLOCK_LENGTH_DAYS)
    return start, start + timedelta(days=BLOCK_LENGTH_DAYS - 1)
