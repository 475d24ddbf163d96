from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar

from .config import BLOCKS_PER_SEASON, ROUND_SIZES

LOADOUT_SLOTS: tuple[str, ...] = ("serve_first", "serve_second", "forehand", "backhand", "volley", "athleticism")
TOURNAMENT_CATEGORIES = {"itf", "pro", "elite", "grand-slam"}
TOURNAMENT_TIERS = {"amateur", "pro", "elite"}
ITEM_TIERS = {"amateur", "pro", "elite", "special"}

STATUS_ACTIVE = "active"
STATUS_ELIMINATED = "eliminated"
STATUS_CHAMPION = "champion"

StatBlock = dict[str, float]


@dataclass(slots=True)
class Loadout:
    serve_first: str
    serve_second: str
    forehand: str
    backhand: str
    volley: str
    athleticism: str

    def slot_items(self) -> list[tuple[str, str]]:
        return [(slot, getattr(self, slot)) for slot in LOADOUT_SLOTS]

    def to_dict(self) -> dict[str, str]:
        return dict(self.slot_items())

    @classmethod
    def from_dict(cls, raw: dict[str, str]) -> Loadout:
        return cls(**{slot: str(raw.get(slot, "")) for slot in LOADOUT_SLOTS})


@dataclass(slots=True)
class PlayerStats:
    serve_first: StatBlock
    serve_second: StatBlock
    forehand: StatBlock
    backhand: StatBlock
    volley: StatBlock
    athleticism: StatBlock

    def blocks(self) -> list[StatBlock]:
        return [getattr(self, slot) for slot in LOADOUT_SLOTS]

    def to_dict(self) -> dict[str, StatBlock]:
        return {slot: dict(getattr(self, slot)) for slot in LOADOUT_SLOTS}


@dataclass(frozen=True, slots=True)
class ShopItem:
    id: str
    player: str
    shot: str
    stats: StatBlock
    price: int
    tier: str
    perk: str | None = None

    def fits_slot(self, slot: str) -> bool:
        if self.shot == "serve":
            return slot in {"serve_first", "serve_second"}
        return self.shot == slot


@dataclass(frozen=True, slots=True)
class AiProfile:
    id: str
    name: str
    description: str
    loadout: Loadout
    away_bias: float
    home_y: float
    drop_shot_chance: float

    @property
    def tendencies(self) -> dict[str, float]:
        return {
            "away_bias": self.away_bias,
            "home_y": self.home_y,
            "drop_shot_chance": self.drop_shot_chance,
        }


@dataclass(slots=True)
class PlayerProfile:
    id: str
    name: str
    loadout: Loadout
    ranking_points: int = 0
    tournament_ranking_points: dict[str, int] = field(default_factory=dict)
    tournament_wins: dict[str, int] = field(default_factory=dict)
    seed_ranking: int = 0
    ai_profile_id: str | None = None
    is_human: bool = False

    @property
    def titles(self) -> int:
        return sum(self.tournament_wins.values())


@dataclass(frozen=True, slots=True)
class RankingGate:
    max_rank: int | None = None
    min_points: int | None = None

    @property
    def is_open(self) -> bool:
        return self.max_rank is None and self.min_points is None

    def admits(self, rank: int, points: int) -> bool:
        if self.max_rank is not None and rank > self.max_rank:
            return False
        if self.min_points is not None and points < self.min_points:
            return False
        return True


@dataclass(frozen=True, slots=True)
class TournamentDefinition:
    id: str
    name: str
    category: str
    tier: str
    surface: str
    block: int
    prizes: tuple[int, ...]
    ranking_points: tuple[int, ...]
    ranking_gate: RankingGate = field(default_factory=RankingGate)
    champion_bonus: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if self.category not in TOURNAMENT_CATEGORIES:
            raise ValueError(f"{self.id}: unknown category {self.category!r}.")
        if self.tier not in TOURNAMENT_TIERS:
            raise ValueError(f"{self.id}: unknown tier {self.tier!r}.")
        if not 1 <= self.block <= BLOCKS_PER_SEASON:
            raise ValueError(f"{self.id}: block {self.block} outside 1..{BLOCKS_PER_SEASON}.")
        if len(self.prizes) != len(ROUND_SIZES):
            raise ValueError(f"{self.id}: expected {len(ROUND_SIZES)} prize values.")
        if len(self.ranking_points) != len(ROUND_SIZES) + 1:
            raise ValueError(f"{self.id}: expected {len(ROUND_SIZES) + 1} ranking point values.")

    @property
    def champion_points(self) -> int:
        return self.ranking_points[-1]


@dataclass(frozen=True, slots=True)
class TournamentMatch:
    id: str
    round: int
    slot: int
    player1_id: str | None = None
    player2_id: str | None = None
    winner_id: str | None = None
    ai_profile_id: str | None = None
    ranking_awarded: bool = False

    @property
    def participants(self) -> tuple[str, ...]:
        return tuple(pid for pid in (self.player1_id, self.player2_id) if pid is not None)

    @property
    def is_ready(self) -> bool:
        return self.player1_id is not None and self.player2_id is not None

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    @property
    def loser_id(self) -> str | None:
        if self.winner_id is None:
            return None
        return self.player2_id if self.winner_id == self.player1_id else self.player1_id

    def involves(self, player_id: str | None) -> bool:
        return player_id is not None and player_id in (self.player1_id, self.player2_id)

    def opponent_of(self, player_id: str) -> str | None:
        if player_id == self.player1_id:
            return self.player2_id
        if player_id == self.player2_id:
            return self.player1_id
        return None


@dataclass(frozen=True, slots=True)
class TournamentState:
    tournament_id: str
    rounds: tuple[tuple[TournamentMatch, ...], ...]
    status: str = STATUS_ACTIVE
    human_id: str | None = None

    STATUSES: ClassVar[frozenset[str]] = frozenset({STATUS_ACTIVE, STATUS_ELIMINATED, STATUS_CHAMPION})

    def __post_init__(self) -> None:
        if self.status not in self.STATUSES:
            raise ValueError(f"Unknown tournament status {self.status!r}.")
        if tuple(len(matches) for matches in self.rounds) != ROUND_SIZES:
            raise ValueError(f"{self.tournament_id}: bracket rounds must have sizes {ROUND_SIZES}.")
        for matches in self.rounds:
            for match in matches:
                if match.winner_id is not None and match.winner_id not in match.participants:
                    raise ValueError(f"{match.id}: winner {match.winner_id} is not a participant.")

    @property
    def final(self) -> TournamentMatch:
        return self.rounds[-1][0]

    @property
    def champion_id(self) -> str | None:
        return self.final.winner_id

    @property
    def is_complete(self) -> bool:
        return self.final.winner_id is not None

    @property
    def entrants(self) -> list[str]:
        return [pid for match in self.rounds[0] for pid in match.participants]

    def matches(self) -> list[TournamentMatch]:
        return [match for matches in self.rounds for match in matches]

    def find_match(self, match_id: str) -> TournamentMatch | None:
        for match in self.matches():
            if match.id == match_id:
                return match
        return None

    def with_round(self, round_index: int, matches: list[TournamentMatch]) -> TournamentState:
        rounds = list(self.rounds)
        rounds[round_index] = tuple(matches)
        return replace(self, rounds=tuple(rounds))

    def with_status(self, status: str) -> TournamentState:
        return replace(self, status=status)
