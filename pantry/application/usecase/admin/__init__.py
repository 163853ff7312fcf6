"""Admin use cases."""

from .flag_user import FlagUserRequest, FlagUserResponse, FlagUserUseCase
from .get_moderation_stats import (
    GetModerationStatsRequest,
    GetModerationStatsResponse,
    GetModerationStatsUseCase,
)
from .manage_user import ManageUserRequest, ManageUserResponse, ManageUserUseCase

__all__ = [
    "FlagUserRequest",
    "FlagUserResponse",
    "FlagUserUseCase",
    "GetModerationStatsRequest",
    "GetModerationStatsResponse",
    "GetModerationStatsUseCase",
    "ManageUserRequest",
    "ManageUserResponse",
    "ManageUserUseCase",
]
