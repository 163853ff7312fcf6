"""Application layer DI providers."""

from dishka import Scope, provide

from pantry.application.moderation_service import ModerationService
from pantry.application.usecase.admin import (
    FlagUserUseCase,
    GetModerationStatsUseCase,
    ManageUserUseCase,
)
from pantry.application.usecase.comment import (
    FlagCommentUseCase,
    ListCommentQueueUseCase,
    ModerateCommentUseCase,
    SubmitCommentUseCase,
    UnflagCommentUseCase,
)
from pantry.application.usecase.rating import GetUserRatingUseCase, RateRecipeUseCase
from pantry.application.usecase.recipe import (
    DeleteRecipeUseCase,
    ListPendingRecipesUseCase,
    ListRecipesUseCase,
    ModerateRecipeUseCase,
    SubmitRecipeUseCase,
)
from pantry.config import ModerationSettings
from pantry.domain.repository import UnitOfWork
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


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Recipe use cases
    @provide
    def get_submit_recipe_use_case(
        self, user_service: UserService, recipe_service: RecipeService
    ) -> SubmitRecipeUseCase:
        """Provide submit recipe use case."""
        return SubmitRecipeUseCase(
            user_service=user_service, recipe_service=recipe_service
        )

    @provide
    def get_moderate_recipe_use_case(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
    ) -> ModerateRecipeUseCase:
        """Provide moderate recipe use case."""
        return ModerateRecipeUseCase(
            user_service=user_service,
            recipe_service=recipe_service,
            state_machine=state_machine,
            audit_recorder=audit_recorder,
        )

    @provide
    def get_delete_recipe_use_case(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        comment_service: CommentService,
        rating_aggregator: RatingAggregator,
        audit_recorder: AuditRecorder,
    ) -> DeleteRecipeUseCase:
        """Provide delete recipe use case."""
        return DeleteRecipeUseCase(
            user_service=user_service,
            recipe_service=recipe_service,
            comment_service=comment_service,
            rating_aggregator=rating_aggregator,
            audit_recorder=audit_recorder,
        )

    @provide
    def get_list_pending_recipes_use_case(
        self, user_service: UserService, recipe_service: RecipeService
    ) -> ListPendingRecipesUseCase:
        """Provide list pending recipes use case."""
        return ListPendingRecipesUseCase(
            user_service=user_service, recipe_service=recipe_service
        )

    @provide
    def get_list_recipes_use_case(
        self, user_service: UserService, recipe_service: RecipeService
    ) -> ListRecipesUseCase:
        """Provide list recipes use case."""
        return ListRecipesUseCase(
            user_service=user_service, recipe_service=recipe_service
        )

    # Comment use cases
    @provide
    def get_submit_comment_use_case(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        comment_service: CommentService,
        content_filter: ContentFilter,
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(
            user_service=user_service,
            recipe_service=recipe_service,
            comment_service=comment_service,
            content_filter=content_filter,
        )

    @provide
    def get_moderate_comment_use_case(
        self,
        user_service: UserService,
        comment_service: CommentService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(
            user_service=user_service,
            comment_service=comment_service,
            state_machine=state_machine,
            audit_recorder=audit_recorder,
        )

    @provide
    def get_flag_comment_use_case(
        self,
        user_service: UserService,
        comment_service: CommentService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
        settings: ModerationSettings,
    ) -> FlagCommentUseCase:
        """Provide flag comment use case."""
        return FlagCommentUseCase(
            user_service=user_service,
            comment_service=comment_service,
            state_machine=state_machine,
            audit_recorder=audit_recorder,
            settings=settings,
        )

    @provide
    def get_unflag_comment_use_case(
        self,
        user_service: UserService,
        comment_service: CommentService,
        state_machine: ModerationStateMachine,
        audit_recorder: AuditRecorder,
    ) -> UnflagCommentUseCase:
        """Provide unflag comment use case."""
        return UnflagCommentUseCase(
            user_service=user_service,
            comment_service=comment_service,
            state_machine=state_machine,
            audit_recorder=audit_recorder,
        )

    @provide
    def get_list_comment_queue_use_case(
        self, user_service: UserService, comment_service: CommentService
    ) -> ListCommentQueueUseCase:
        """Provide list comment queue use case."""
        return ListCommentQueueUseCase(
            user_service=user_service, comment_service=comment_service
        )

    # Rating use cases
    @provide
    def get_rate_recipe_use_case(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        rating_aggregator: RatingAggregator,
        settings: ModerationSettings,
    ) -> RateRecipeUseCase:
        """Provide rate recipe use case."""
        return RateRecipeUseCase(
            user_service=user_service,
            recipe_service=recipe_service,
            rating_aggregator=rating_aggregator,
            settings=settings,
        )

    @provide
    def get_get_user_rating_use_case(
        self, user_service: UserService, rating_aggregator: RatingAggregator
    ) -> GetUserRatingUseCase:
        """Provide get user rating use case."""
        return GetUserRatingUseCase(
            user_service=user_service, rating_aggregator=rating_aggregator
        )

    # Admin use cases
    @provide
    def get_manage_user_use_case(
        self, user_service: UserService, audit_recorder: AuditRecorder
    ) -> ManageUserUseCase:
        """Provide manage user use case."""
        return ManageUserUseCase(
            user_service=user_service, audit_recorder=audit_recorder
        )

    @provide
    def get_flag_user_use_case(
        self,
        user_service: UserService,
        audit_recorder: AuditRecorder,
        settings: ModerationSettings,
    ) -> FlagUserUseCase:
        """Provide flag user use case."""
        return FlagUserUseCase(
            user_service=user_service,
            audit_recorder=audit_recorder,
            settings=settings,
        )

    @provide
    def get_get_moderation_stats_use_case(
        self,
        user_service: UserService,
        recipe_service: RecipeService,
        comment_service: CommentService,
    ) -> GetModerationStatsUseCase:
        """Provide get moderation stats use case."""
        return GetModerationStatsUseCase(
            user_service=user_service,
            recipe_service=recipe_service,
            comment_service=comment_service,
        )

    # Facade
    @provide
    def get_moderation_service(
        self,
        unit_of_work: UnitOfWork,
        settings: ModerationSettings,
        submit_recipe_use_case: SubmitRecipeUseCase,
        moderate_recipe_use_case: ModerateRecipeUseCase,
        delete_recipe_use_case: DeleteRecipeUseCase,
        list_pending_recipes_use_case: ListPendingRecipesUseCase,
        list_recipes_use_case: ListRecipesUseCase,
        submit_comment_use_case: SubmitCommentUseCase,
        moderate_comment_use_case: ModerateCommentUseCase,
        flag_comment_use_case: FlagCommentUseCase,
        unflag_comment_use_case: UnflagCommentUseCase,
        list_comment_queue_use_case: ListCommentQueueUseCase,
        rate_recipe_use_case: RateRecipeUseCase,
        get_user_rating_use_case: GetUserRatingUseCase,
        manage_user_use_case: ManageUserUseCase,
        flag_user_use_case: FlagUserUseCase,
        get_moderation_stats_use_case: GetModerationStatsUseCase,
    ) -> ModerationService:
        """Provide the moderation facade."""
        return ModerationService(
            unit_of_work=unit_of_work,
            settings=settings,
            submit_recipe_use_case=submit_recipe_use_case,
            moderate_recipe_use_case=moderate_recipe_use_case,
            delete_recipe_use_case=delete_recipe_use_case,
            list_pending_recipes_use_case=list_pending_recipes_use_case,
            list_recipes_use_case=list_recipes_use_case,
            submit_comment_use_case=submit_comment_use_case,
            moderate_comment_use_case=moderate_comment_use_case,
            flag_comment_use_case=flag_comment_use_case,
            unflag_comment_use_case=unflag_comment_use_case,
            list_comment_queue_use_case=list_comment_queue_use_case,
            rate_recipe_use_case=rate_recipe_use_case,
            get_user_rating_use_case=get_user_rating_use_case,
            manage_user_use_case=manage_user_use_case,
            flag_user_use_case=flag_user_use_case,
            get_moderation_stats_use_case=get_moderation_stats_use_case,
        )
