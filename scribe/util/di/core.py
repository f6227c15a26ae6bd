"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from scribe.config import NotificationSettings, Settings
from scribe.domain.value import AdminUser, AdminUserId
from scribe.util.di.base import ProviderBase
from scribe.util.error import ConfigurationError

DEFAULT_ADMIN_TOKEN = "CHANGE_ME_IN_PRODUCTION"


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment.

        Raises:
            ConfigurationError: If production runs with the default admin token
        """
        settings = Settings()
        if (
            settings.environment == "production"
            and settings.admin.api_token == DEFAULT_ADMIN_TOKEN
        ):
            raise ConfigurationError("ADMIN__API_TOKEN must be set in production")
        return settings

    @provide(scope=Scope.APP)
    def provide_notification_settings(self, settings: Settings) -> NotificationSettings:
        """Provide notification settings."""
        return settings.notifications

    @provide(scope=Scope.APP)
    def provide_admin_user(self, settings: Settings) -> AdminUser:
        """Provide the administrator identity used for admin replies."""
        return AdminUser(
            id=AdminUserId(settings.admin.user_id),
            name=settings.admin.name,
            email=settings.admin.email,
        )
