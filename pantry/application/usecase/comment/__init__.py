"""Comment use cases."""

from .flag_comment import (
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    UnflagCommentUseCase,
)
from .list_comment_queue import (
    ListCommentQueueRequest,
    ListCommentQueueResponse,
    ListCommentQueueUseCase,
    QueuedComment,
)
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from .submit_comment import (
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)

__all__ = [
    "FlagCommentRequest",
    "FlagCommentResponse",
    "FlagCommentUseCase",
    "UnflagCommentUseCase",
    "ListCommentQueueRequest",
    "ListCommentQueueResponse",
    "ListCommentQueueUseCase",
    "QueuedComment",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
    "SubmitCommentRequest",
    "SubmitCommentResponse",
    "SubmitCommentUseCase",
]
