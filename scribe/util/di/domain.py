"""Domain layer DI providers."""

from dishka import Scope, provide

from scribe.config import Settings
from scribe.domain.repository import (
    CommentRepository,
    PostRepository,
    SiteSettingRepository,
)
from scribe.domain.service import (
    AdminAuthService,
    AntiSpamService,
    CommentRateLimiter,
    CommentService,
    ContentRules,
    LoginRateLimiter,
)
from scribe.domain.value import AdminUser
from scribe.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle. The rate limiters hold the per-IP counters and are APP-scoped
    so every request shares them.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_login_rate_limiter(self, settings: Settings) -> LoginRateLimiter:
        """Provide the process-wide admin login limiter."""
        return LoginRateLimiter(
            max_attempts=settings.rate_limit.login_max_attempts,
            lockout_seconds=settings.rate_limit.login_lockout_seconds,
        )

    @provide(scope=Scope.APP)
    def get_comment_rate_limiter(self, settings: Settings) -> CommentRateLimiter:
        """Provide the process-wide comment flood limiter."""
        return CommentRateLimiter(
            max_requests=settings.rate_limit.comment_max_requests,
            window_seconds=settings.rate_limit.comment_window_seconds,
        )

    @provide(scope=Scope.APP)
    def get_content_rules(self, settings: Settings) -> ContentRules:
        """Provide content filter thresholds."""
        return ContentRules(
            forbidden_words=tuple(settings.antispam.forbidden_words),
            min_length=settings.antispam.min_content_length,
            max_length=settings.antispam.max_content_length,
            max_links=settings.antispam.max_links,
        )

    @provide
    def get_antispam_service(
        self, comment_rate_limiter: CommentRateLimiter, content_rules: ContentRules
    ) -> AntiSpamService:
        """Provide anti-spam domain service."""
        return AntiSpamService(
            comment_rate_limiter=comment_rate_limiter, content_rules=content_rules
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        setting_repository: SiteSettingRepository,
        settings: Settings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            setting_repository=setting_repository,
            batch_limit=settings.comments.batch_limit,
        )

    @provide
    def get_admin_auth_service(
        self,
        login_rate_limiter: LoginRateLimiter,
        settings: Settings,
        admin: AdminUser,
    ) -> AdminAuthService:
        """Provide admin authentication service."""
        return AdminAuthService(
            login_rate_limiter=login_rate_limiter,
            api_token=settings.admin.api_token,
            admin=admin,
        )
