"""Application layer DI providers."""

from dishka import Scope, provide

from scribe.adapter.mail import MailClient
from scribe.application.notification import CommentNotifier
from scribe.application.usecase.comment import (
    BatchUpdateCommentsUseCase,
    CreateAdminReplyUseCase,
    DeleteCommentUseCase,
    GetAdminCommentsUseCase,
    GetApprovedCommentsUseCase,
    GetCommentStatsUseCase,
    SubmitCommentUseCase,
    UpdateCommentStatusUseCase,
)
from scribe.config import NotificationSettings, Settings
from scribe.domain.repository import PostRepository
from scribe.domain.service import AntiSpamService, CommentService
from scribe.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.APP)
    def get_comment_notifier(
        self, mail_client: MailClient, settings: NotificationSettings
    ) -> CommentNotifier:
        """Provide comment notifier."""
        return CommentNotifier(mail_client=mail_client, settings=settings)

    # Public comment use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self,
        antispam_service: AntiSpamService,
        comment_service: CommentService,
        post_repository: PostRepository,
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(
            antispam_service=antispam_service,
            comment_service=comment_service,
            post_repository=post_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_approved_comments_use_case(
        self, comment_service: CommentService, settings: Settings
    ) -> GetApprovedCommentsUseCase:
        """Provide get approved comments use case."""
        return GetApprovedCommentsUseCase(
            comment_service=comment_service,
            default_page_size=settings.comments.public_page_size,
            max_page_size=settings.comments.public_max_page_size,
        )

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_get_admin_comments_use_case(
        self, comment_service: CommentService, settings: Settings
    ) -> GetAdminCommentsUseCase:
        """Provide get admin comments use case."""
        return GetAdminCommentsUseCase(
            comment_service=comment_service,
            default_page_size=settings.comments.admin_page_size,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_status_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentStatusUseCase:
        """Provide update comment status use case."""
        return UpdateCommentStatusUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_create_admin_reply_use_case(
        self, comment_service: CommentService, post_repository: PostRepository
    ) -> CreateAdminReplyUseCase:
        """Provide create admin reply use case."""
        return CreateAdminReplyUseCase(
            comment_service=comment_service, post_repository=post_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_batch_update_comments_use_case(
        self, comment_service: CommentService
    ) -> BatchUpdateCommentsUseCase:
        """Provide batch update comments use case."""
        return BatchUpdateCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_stats_use_case(
        self, comment_service: CommentService
    ) -> GetCommentStatsUseCase:
        """Provide get comment stats use case."""
        return GetCommentStatsUseCase(comment_service=comment_service)
