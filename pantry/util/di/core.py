"""Settings providers."""

from dishka import Scope, provide

from pantry.config import ModerationSettings, Settings
from pantry.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings live for the whole container; nothing here is mocked."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        """Moderation policy, injected on its own into domain services."""
        return settings.moderation
