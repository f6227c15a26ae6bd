"""Comment use cases."""

from .batch_update_comments import (
    BatchUpdateCommentsRequest,
    BatchUpdateCommentsResponse,
    BatchUpdateCommentsUseCase,
)
from .create_admin_reply import (
    CreateAdminReplyRequest,
    CreateAdminReplyResponse,
    CreateAdminReplyUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_admin_comments import GetAdminCommentsRequest, GetAdminCommentsUseCase
from .get_approved_comments import (
    GetApprovedCommentsRequest,
    GetApprovedCommentsUseCase,
)
from .get_comment_stats import GetCommentStatsUseCase
from .submit_comment import (
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)
from .update_comment_status import (
    UpdateCommentStatusRequest,
    UpdateCommentStatusUseCase,
)

__all__ = [
    "BatchUpdateCommentsRequest",
    "BatchUpdateCommentsResponse",
    "BatchUpdateCommentsUseCase",
    "CreateAdminReplyRequest",
    "CreateAdminReplyResponse",
    "CreateAdminReplyUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetAdminCommentsRequest",
    "GetAdminCommentsUseCase",
    "GetApprovedCommentsRequest",
    "GetApprovedCommentsUseCase",
    "GetCommentStatsUseCase",
    "SubmitCommentRequest",
    "SubmitCommentResponse",
    "SubmitCommentUseCase",
    "UpdateCommentStatusRequest",
    "UpdateCommentStatusUseCase",
]
