"""Rating use cases."""

from .get_user_rating import (
    GetUserRatingRequest,
    GetUserRatingResponse,
    GetUserRatingUseCase,
)
from .rate_recipe import RateRecipeRequest, RateRecipeResponse, RateRecipeUseCase

__all__ = [
    "GetUserRatingRequest",
    "GetUserRatingResponse",
    "GetUserRatingUseCase",
    "RateRecipeRequest",
    "RateRecipeResponse",
    "RateRecipeUseCase",
]
