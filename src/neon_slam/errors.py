from __future__ import annotations


class CareerError(ValueError):
    """Base class for recoverable engine failures."""


class InsufficientFieldError(CareerError):
    def __init__(self, tournament_id: str, available: int, needed: int) -> None:
        super().__init__(f"{tournament_id}: only {available} of {needed} entrants available.")
        self.tournament_id = tournament_id
        self.available = available
        self.needed = needed


class NoPendingMatchError(CareerError):
    pass


class TournamentInProgressError(CareerError):
    pass
