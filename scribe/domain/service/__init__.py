"""Domain services."""

from .admin_auth import AdminAuthService
from .antispam import AntiSpamService, ContentRules, check_honeypot, filter_content
from .base import Service
from .comment_service import (
    AdminCommentsPage,
    ApprovedCommentsPage,
    CommentService,
    NewComment,
    resolve_effective_parent,
)
from .rate_limiter import CommentRateLimiter, LoginRateLimiter

__all__ = [
    "AdminAuthService",
    "AdminCommentsPage",
    "AntiSpamService",
    "ApprovedCommentsPage",
    "CommentRateLimiter",
    "CommentService",
    "ContentRules",
    "LoginRateLimiter",
    "NewComment",
    "Service",
    "check_honeypot",
    "filter_content",
    "resolve_effective_parent",
]
