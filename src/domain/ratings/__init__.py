"""Rating-system domain modules."""

from domain.ratings.elo import EloParameters, EloRatingEngine, PlayerRatingEvent, ScopedEloCalculator
from domain.ratings.scope import RatingScope, resolve_scope_ratings

__all__ = [
    "EloParameters",
    "EloRatingEngine",
    "PlayerRatingEvent",
    "RatingScope",
    "ScopedEloCalculator",
    "resolve_scope_ratings",
]
