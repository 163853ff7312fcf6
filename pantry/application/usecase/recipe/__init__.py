"""Recipe use cases."""

from .delete_recipe import (
    DeletedBy,
    DeletedRecipe,
    DeleteRecipeRequest,
    DeleteRecipeResponse,
    DeleteRecipeUseCase,
)
from .list_pending_recipes import (
    ListPendingRecipesRequest,
    ListPendingRecipesResponse,
    ListPendingRecipesUseCase,
    PendingRecipe,
)
from .list_recipes import (
    ListRecipesRequest,
    ListRecipesResponse,
    ListRecipesUseCase,
    RecipeSummary,
)
from .moderate_recipe import (
    ModerateRecipeRequest,
    ModerateRecipeResponse,
    ModerateRecipeUseCase,
)
from .submit_recipe import (
    SubmitRecipeRequest,
    SubmitRecipeResponse,
    SubmitRecipeUseCase,
)

__all__ = [
    "DeletedBy",
    "DeletedRecipe",
    "DeleteRecipeRequest",
    "DeleteRecipeResponse",
    "DeleteRecipeUseCase",
    "ListPendingRecipesRequest",
    "ListPendingRecipesResponse",
    "ListPendingRecipesUseCase",
    "PendingRecipe",
    "ListRecipesRequest",
    "ListRecipesResponse",
    "ListRecipesUseCase",
    "RecipeSummary",
    "ModerateRecipeRequest",
    "ModerateRecipeResponse",
    "ModerateRecipeUseCase",
    "SubmitRecipeRequest",
    "SubmitRecipeResponse",
    "SubmitRecipeUseCase",
]
