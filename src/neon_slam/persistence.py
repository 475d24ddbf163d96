"""Save-file schema for a career session."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .models import Loadout, PlayerProfile, TournamentMatch, TournamentState


class LoadoutModel(BaseModel):
    serve_first: str
    serve_second: str
    forehand: str
    backhand: str
    volley: str
    athleticism: str


class PlayerModel(BaseModel):
    id: str
    name: str
    loadout: LoadoutModel
    ranking_points: int = Field(default=0, ge=0)
    tournament_ranking_points: dict[str, int] = {}
    tournament_wins: dict[str, int] = {}
    seed_ranking: int = 0
    ai_profile_id: str | None = None
    is_human: bool = False


class MatchModel(BaseModel):
    id: str
    round: int = Field(ge=1, le=4)
    slot: int = Field(ge=0)
    player1_id: str | None = None
    player2_id: str | None = None
    winner_id: str | None = None
    ai_profile_id: str | None = None
    ranking_awarded: bool = False


class TournamentStateModel(BaseModel):
    tournament_id: str
    rounds: list[list[MatchModel]]
    status: str = "active"
    human_id: str | None = None


class CareerSnapshot(BaseModel):
    save_version: int
    season_number: int = Field(default=1, ge=1)
    current_block: int = Field(default=1, ge=1)
    last_resolved_block: int = Field(default=0, ge=0)
    wallet: int = 0
    owned_items: list[str] = []
    players: list[PlayerModel]
    active_tournament: TournamentStateModel | None = None
    last_block_report: dict[str, Any] | None = None
    last_result: dict[str, Any] | None = None


def player_to_model(player: PlayerProfile) -> PlayerModel:
    return PlayerModel(
        id=player.id,
        name=player.name,
        loadout=LoadoutModel(**player.loadout.to_dict()),
        ranking_points=player.ranking_points,
        tournament_ranking_points=dict(player.tournament_ranking_points),
        tournament_wins=dict(player.tournament_wins),
        seed_ranking=player.seed_ranking,
        ai_profile_id=player.ai_profile_id,
        is_human=player.is_human,
    )


def player_from_model(model: PlayerModel) -> PlayerProfile:
    return PlayerProfile(
        id=model.id,
        name=model.name,
        loadout=Loadout.from_dict(model.loadout.model_dump()),
        ranking_points=model.ranking_points,
        tournament_ranking_points=dict(model.tournament_ranking_points),
        tournament_wins=dict(model.tournament_wins),
        seed_ranking=model.seed_ranking,
        ai_profile_id=model.ai_profile_id,
        is_human=model.is_human,
    )


def state_to_model(state: TournamentState) -> TournamentStateModel:
    return TournamentStateModel(
        tournament_id=state.tournament_id,
        rounds=[
            [
                MatchModel(
                    id=m.id,
                    round=m.round,
                    slot=m.slot,
                    player1_id=m.player1_id,
                    player2_id=m.player2_id,
                    winner_id=m.winner_id,
                    ai_profile_id=m.ai_profile_id,
                    ranking_awarded=m.ranking_awarded,
                )
                for m in matches
            ]
            for matches in state.rounds
        ],
        status=state.status,
        human_id=state.human_id,
    )


def state_from_model(model: TournamentStateModel) -> TournamentState:
    """Rebuild a bracket; raises ``ValueError`` when the saved bracket breaks its invariants."""
    rounds = tuple(
        tuple(TournamentMatch(**m.model_dump()) for m in matches)
        for matches in model.rounds
    )
    return TournamentState(
        tournament_id=model.tournament_id,
        rounds=rounds,
        status=model.status,
        human_id=model.human_id,
    )
