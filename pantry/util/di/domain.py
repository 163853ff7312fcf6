"""Domain layer DI providers."""

from dishka import Scope, provide

from pantry.config import ModerationSettings
from pantry.domain.repository import (
    AuditRepository,
    CommentRepository,
    RatingRepository,
    RecipeRepository,
    UserRepository,
)
from pantry.domain.service import (
    AuditRecorder,
    CommentService,
    ContentFilter,
    ModerationStateMachine,
    RatingAggregator,
    RecipeService,
    UserService,
)
from pantry.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services that touch repositories are REQUEST-scoped to align with the
    repository/session lifecycle. Pure services are APP-scoped.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_content_filter(self, settings: ModerationSettings) -> ContentFilter:
        """Provide the blocklist content filter."""
        return ContentFilter(blocklist=settings.blocklist)

    @provide(scope=Scope.APP)
    def get_state_machine(self, settings: ModerationSettings) -> ModerationStateMachine:
        """Provide moderation transitions configured with the flag policy."""
        return ModerationStateMachine(
            clear_flag_on_review=settings.clear_flag_on_review
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_recipe_service(self, recipe_repository: RecipeRepository) -> RecipeService:
        """Provide recipe domain service."""
        return RecipeService(recipe_repository=recipe_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_rating_aggregator(
        self,
        rating_repository: RatingRepository,
        recipe_repository: RecipeRepository,
    ) -> RatingAggregator:
        """Provide rating aggregation service."""
        return RatingAggregator(
            rating_repository=rating_repository,
            recipe_repository=recipe_repository,
        )

    @provide
    def get_audit_recorder(
        self, audit_repository: AuditRepository, settings: ModerationSettings
    ) -> AuditRecorder:
        """Provide audit trail recorder."""
        return AuditRecorder(
            audit_repository=audit_repository,
            default_reason=settings.default_reason,
        )
