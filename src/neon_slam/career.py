from __future__ import annotations

import json
import logging
import random
import shutil
from pathlib import Path
from threading import Lock
from typing import Any

from pydantic import ValidationError

from .app import build_default_roster
from .blocks import BlockReport, block_definitions, finalize_block
from .bracket import (
    BracketContext,
    apply_human_result,
    build_tournament,
    forfeit,
    furthest_round,
    pending_human_match,
)
from .catalog import AI_PROFILES, block_dates, build_calendar, item_index, profile_index
from .config import BLOCKS_PER_SEASON, HUMAN_PLAYER_ID, ROUND_LABELS, STARTING_CREDITS, TIER_STAT_SCALE
from .eligibility import is_eligible, rank_order, rank_table
from .errors import CareerError, InsufficientFieldError
from .models import (
    STATUS_ACTIVE,
    STATUS_CHAMPION,
    AiProfile,
    Loadout,
    PlayerProfile,
    ShopItem,
    TournamentDefinition,
    TournamentState,
)
from .persistence import CareerSnapshot, player_from_model, player_to_model, state_from_model, state_to_model
from .seeding import SeedingSummary, seed_season
from .stats import resolve_stats, scale_stats

_log = logging.getLogger("neon_slam.career")

MATCH_WINNERS = ("player", "opponent")


class CareerSession:
    """One human career: roster, wallet, calendar position and the live bracket."""

    SAVE_VERSION = 1

    def __init__(
        self,
        players: list[PlayerProfile] | None = None,
        definitions: list[TournamentDefinition] | None = None,
        items: dict[str, ShopItem] | None = None,
        profiles: dict[str, AiProfile] | None = None,
        seed: int | None = None,
        state_path: str | None = None,
        human_id: str = HUMAN_PLAYER_ID,
        human_name: str = "You",
    ) -> None:
        self._rng = random.Random(seed)
        self._lock = Lock()
        self.state_path = Path(state_path or "career_state.json")
        self.last_load_error: str = ""
        self.definitions = list(definitions) if definitions is not None else build_calendar()
        self._definitions_by_id = {d.id: d for d in self.definitions}
        self.items = items if items is not None else item_index()
        self.profiles = profiles if profiles is not None else profile_index()
        self.human_id = human_id
        self.seeding_summary: SeedingSummary | None = None

        snapshot = self._load_state()
        if snapshot is not None:
            self._restore(snapshot)
        else:
            self.players = players if players is not None else build_default_roster(human_name=human_name)
            self.season_number = 1
            self.current_block = 1
            self.last_resolved_block = 0
            self.wallet = STARTING_CREDITS
            human = self.get_player(self.human_id)
            self.owned_items: list[str] = sorted(set(human.loadout.to_dict().values())) if human else []
            self.active_tournament: TournamentState | None = None
            self.last_block_report: dict[str, Any] | None = None
            self.last_result: dict[str, Any] | None = None
            self.seeding_summary = seed_season(self.players, self.definitions, self._context(), self._rng)
        if self.get_player(self.human_id) is None:
            raise CareerError(f"Roster has no player with id {self.human_id!r}.")
        self._save_state()

    # -- lookups -----------------------------------------------------------

    @property
    def player(self) -> PlayerProfile:
        human = self.get_player(self.human_id)
        if human is None:
            raise CareerError(f"Roster has no player with id {self.human_id!r}.")
        return human

    def get_player(self, player_id: str | None) -> PlayerProfile | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_tournament(self, tournament_id: str) -> TournamentDefinition | None:
        return self._definitions_by_id.get(tournament_id)

    def rankings(self) -> list[PlayerProfile]:
        return rank_order(self.players)

    def player_rank(self, player_id: str | None = None) -> int:
        return rank_table(self.players)[player_id or self.human_id]

    def block_tournaments(self, block: int | None = None) -> list[TournamentDefinition]:
        return block_definitions(self.definitions, block or self.current_block)

    def block_date_range(self, block: int | None = None) -> tuple[str, str]:
        start, end = block_dates(block or self.current_block)
        return start.isoformat(), end.isoformat()

    def tournament_options(self) -> list[dict[str, Any]]:
        rank = self.player_rank()
        points = self.player.ranking_points
        options: list[dict[str, Any]] = []
        for definition in self.block_tournaments():
            gate = definition.ranking_gate
            options.append(
                {
                    "id": definition.id,
                    "name": definition.name,
                    "category": definition.category,
                    "surface": definition.surface,
                    "prizes": list(definition.prizes),
                    "champion_bonus": definition.champion_bonus,
                    "ranking_points": list(definition.ranking_points),
                    "max_rank": gate.max_rank,
                    "min_points": gate.min_points,
                    "eligible": is_eligible(definition, rank, points),
                    "titles": self.player.tournament_wins.get(definition.id, 0),
                }
            )
        return options

    def _context(self) -> BracketContext:
        default_profile = AI_PROFILES[0].id if AI_PROFILES else None
        return BracketContext.from_players(self.players, self.items, default_profile_id=default_profile)

    # -- tournament flow ---------------------------------------------------

    def set_loadout(self, loadout: Loadout) -> None:
        with self._lock:
            self.player.loadout = loadout
            self._save_state()

    def enter_tournament(self, tournament_id: str) -> dict[str, Any]:
        with self._lock:
            if self.active_tournament is not None:
                return {"entered": False, "reason": "tournament_in_progress"}
            definition = self.get_tournament(tournament_id)
            if definition is None:
                return {"entered": False, "reason": "unknown_tournament"}
            if definition.block != self.current_block:
                return {"entered": False, "reason": "wrong_block", "block": definition.block}
            ranks = rank_table(self.players)
            human = self.player
            if not is_eligible(definition, ranks[human.id], human.ranking_points):
                _log.info("Entry to %s refused: rank %d, %d pts.", tournament_id, ranks[human.id], human.ranking_points)
                return {"entered": False, "reason": "ineligible", "rank": ranks[human.id]}
            try:
                state = build_tournament(definition, self.players, ranks, self._context(), self._rng, human_id=self.human_id)
            except InsufficientFieldError as exc:
                _log.warning("Entry to %s aborted: %s", tournament_id, exc)
                return {"entered": False, "reason": "insufficient_field", "available": exc.available}
            self.active_tournament = state
            self._save_state()
            _log.info("Entered %s (block %d).", definition.name, definition.block)
            return {"entered": True, "tournament_id": tournament_id, "next_match": self._briefing()}

    def next_match(self) -> dict[str, Any] | None:
        return self._briefing()

    def _briefing(self) -> dict[str, Any] | None:
        state = self.active_tournament
        if state is None:
            return None
        match = pending_human_match(state)
        if match is None:
            return None
        definition = self._definitions_by_id[state.tournament_id]
        opponent = self.get_player(match.opponent_of(self.human_id))
        if opponent is None:
            return None
        profile = self.profiles.get(match.ai_profile_id or "") or next(iter(self.profiles.values()), None)
        scale = TIER_STAT_SCALE.get(definition.tier, 1.0)
        ranks = rank_table(self.players)
        return {
            "tournament_id": definition.id,
            "tournament_name": definition.name,
            "match_id": match.id,
            "round": match.round,
            "round_label": ROUND_LABELS[match.round - 1],
            "surface": definition.surface,
            "opponent_id": opponent.id,
            "opponent_name": opponent.name,
            "opponent_rank": ranks[opponent.id],
            "player_rank": ranks[self.human_id],
            "opponent_stats": scale_stats(resolve_stats(opponent.loadout, self.items), scale).to_dict(),
            "player_stats": resolve_stats(self.player.loadout, self.items).to_dict(),
            "opponent_profile": (
                {
                    "id": profile.id,
                    "name": profile.name,
                    "description": profile.description,
                    "tendencies": profile.tendencies,
                }
                if profile is not None
                else None
            ),
        }

    def report_match_result(self, winner: str) -> dict[str, Any]:
        if winner not in MATCH_WINNERS:
            raise ValueError(f"Match winner must be one of {MATCH_WINNERS}, got {winner!r}.")
        with self._lock:
            state = self.active_tournament
            if state is None or pending_human_match(state) is None:
                return {"recorded": False, "reason": "no_pending_match"}
            state = apply_human_result(state, winner == "player", self._context(), self._rng)
            if state.status == STATUS_ACTIVE:
                self.active_tournament = state
                self._save_state()
                return {"recorded": True, "status": state.status, "next_match": self._briefing()}
            result = self._conclude(state)
            return {"recorded": True, "status": state.status, "next_match": None, "result": result}

    def forfeit_tournament(self) -> dict[str, Any]:
        with self._lock:
            state = self.active_tournament
            if state is None:
                return {"forfeited": False, "reason": "no_active_tournament"}
            state = forfeit(state, self._context(), self._rng)
            _log.info("Forfeited %s.", state.tournament_id)
            return {"forfeited": True, "result": self._conclude(state)}

    def skip_block(self) -> dict[str, Any]:
        with self._lock:
            if self.active_tournament is not None:
                return {"skipped": False, "reason": "tournament_in_progress"}
            block = self.current_block
            report = self._finalize_current_block()
            self._save_state()
            return {"skipped": True, "block": block, "report": report.to_dict() if report else None}

    # -- settlement --------------------------------------------------------

    def earnings_for(self, state: TournamentState, definition: TournamentDefinition) -> int:
        reached = furthest_round(state, self.human_id)
        if reached <= 0:
            return 0
        prize = int(definition.prizes[reached - 1])
        if state.status == STATUS_CHAMPION:
            prize += int(definition.champion_bonus)
        return prize

    def _conclude(self, state: TournamentState) -> dict[str, Any]:
        definition = self._definitions_by_id[state.tournament_id]
        earnings = self.earnings_for(state, definition)
        self.wallet += earnings
        self.active_tournament = None
        report = self._finalize_current_block(played=state)
        row = report.row_for(self.human_id) if report is not None else None
        result = {
            "outcome": state.status,
            "tournament_id": definition.id,
            "tournament_name": definition.name,
            "round_reached": furthest_round(state, self.human_id),
            "earnings": earnings,
            "ranking_delta": row.delta_points if row is not None else 0,
        }
        self.last_result = result
        if report is not None:
            self.last_block_report = {**report.to_dict(), "result_summary": result}
        self._save_state()
        _log.info("%s finished: %s, %d credits.", definition.name, state.status, earnings)
        return result

    def _finalize_current_block(self, played: TournamentState | None = None) -> BlockReport | None:
        report = finalize_block(
            self.current_block,
            self.players,
            self.definitions,
            self.last_resolved_block,
            self._context(),
            self._rng,
            played=played,
            human_id=self.human_id,
        )
        if report is not None:
            self.last_resolved_block = report.block
            self.last_block_report = report.to_dict()
        self._advance_block()
        return report

    def _advance_block(self) -> None:
        if self.current_block >= BLOCKS_PER_SEASON:
            self.season_number += 1
            self.current_block = 1
            self.last_resolved_block = 0
            _log.info("Season %d begins.", self.season_number)
        else:
            self.current_block += 1

    # -- persistence -------------------------------------------------------

    def _snapshot(self) -> CareerSnapshot:
        return CareerSnapshot(
            save_version=self.SAVE_VERSION,
            season_number=self.season_number,
            current_block=self.current_block,
            last_resolved_block=self.last_resolved_block,
            wallet=self.wallet,
            owned_items=list(self.owned_items),
            players=[player_to_model(p) for p in self.players],
            active_tournament=state_to_model(self.active_tournament) if self.active_tournament else None,
            last_block_report=self.last_block_report,
            last_result=self.last_result,
        )

    def _restore(self, snapshot: CareerSnapshot) -> None:
        self.players = [player_from_model(p) for p in snapshot.players]
        self.season_number = snapshot.season_number
        self.current_block = min(snapshot.current_block, BLOCKS_PER_SEASON)
        self.last_resolved_block = snapshot.last_resolved_block
        if self.last_resolved_block >= self.current_block:
            self.last_load_error = (
                f"Saved watermark {self.last_resolved_block} is not behind block {self.current_block}; reset."
            )
            self.last_resolved_block = self.current_block - 1
        self.wallet = snapshot.wallet
        self.owned_items = list(snapshot.owned_items)
        self.last_block_report = snapshot.last_block_report
        self.last_result = snapshot.last_result
        self.active_tournament = None
        if snapshot.active_tournament is not None:
            if snapshot.active_tournament.tournament_id not in self._definitions_by_id:
                self.last_load_error = (
                    f"Saved tournament {snapshot.active_tournament.tournament_id} is not in the calendar; dropped."
                )
            else:
                try:
                    self.active_tournament = state_from_model(snapshot.active_tournament)
                except ValueError as exc:
                    self.last_load_error = f"Saved tournament is invalid ({exc}); dropped."
        restored = self.active_tournament
        if restored is not None and self._definitions_by_id[restored.tournament_id].block != self.current_block:
            self.last_load_error = f"Saved tournament {restored.tournament_id} is not in block {self.current_block}; dropped."
            self.active_tournament = None

    def _load_state(self) -> CareerSnapshot | None:
        if not self.state_path.exists():
            return None
        try:
            raw = json.loads(self.state_path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                self.last_load_error = "Career state file has invalid format; starting a new career."
                return None
            version = int(raw.get("save_version", 1) or 1)
            if version > self.SAVE_VERSION:
                self.last_load_error = (
                    f"Unsupported career state version {version}; app supports up to {self.SAVE_VERSION}."
                )
                _log.warning("%s", self.last_load_error)
                return None
            raw["save_version"] = version
            snapshot = CareerSnapshot.model_validate(raw)
            if not any(p.id == self.human_id for p in snapshot.players):
                self.last_load_error = f"Career state has no player with id {self.human_id!r}; starting a new career."
                _log.warning("%s", self.last_load_error)
                return None
        except (json.JSONDecodeError, OSError, ValidationError, TypeError, ValueError) as exc:
            self.last_load_error = f"Failed to load career state ({exc}); starting a new career."
            _log.warning("%s", self.last_load_error)
            return None
        _log.info("Loaded career state from %s.", self.state_path)
        return snapshot

    def _save_state(self) -> None:
        self._write_json_with_backup(self.state_path, self._snapshot().model_dump(mode="json"))

    def _write_json_with_backup(self, path: Path, payload: Any, *, with_backup: bool = True) -> None:
        if with_backup and path.exists():
            backup = path.with_suffix(path.suffix + ".bak")
            try:
                shutil.copy2(path, backup)
            except OSError as exc:
                _log.warning("Could not back up %s: %s", path, exc)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
