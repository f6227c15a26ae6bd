"""Comment notification mail.

Notifications run after the response has been produced (FastAPI background
tasks). A notification never changes the outcome of the request that
triggered it: ``dispatch`` logs and swallows delivery failures.
"""

from datetime import datetime
from html import escape
from typing import Any, Awaitable, Callable, Optional

import logfire

from scribe.adapter.mail import MailClient, MailMessage
from scribe.config import NotificationSettings
from scribe.domain.model import Comment, Post
from scribe.domain.value import CommentStatus

_NEW_COMMENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #2563eb;">New comment awaiting review</h2>
  <p><strong>Post</strong><br>{post_title}</p>
  <p><strong>Author</strong><br>{author_name}</p>
  <p><strong>Email</strong><br>{author_email}</p>
  <p><strong>Comment</strong></p>
  <blockquote style="border-left: 4px solid #2563eb; padding-left: 12px;">{content}</blockquote>
  <p><strong>Posted</strong><br>{created_at}</p>
  <p style="color: #6b7280; font-size: 14px;">This message was sent automatically. Please do not reply.</p>
</body>
</html>"""

_REPLY_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #2563eb;">You have a new reply</h2>
  <p><strong>Post</strong><br>{post_title}</p>
  <p><strong>Your comment</strong></p>
  <blockquote style="border-left: 4px solid #2563eb; padding-left: 12px;">{parent_content}</blockquote>
  <p><strong>Reply from {reply_author}</strong></p>
  <blockquote style="border-left: 4px solid #10b981; padding-left: 12px;">{reply_content}</blockquote>
  <p><strong>Replied</strong><br>{created_at}</p>
  <p style="color: #6b7280; font-size: 14px;">This message was sent automatically. Please do not reply.</p>
</body>
</html>"""


def _format_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M UTC")


class CommentNotifier:
    """Builds and sends comment notification mail."""

    def __init__(self, mail_client: MailClient, settings: NotificationSettings) -> None:
        """Initialize notifier.

        Args:
            mail_client: Outbound mail client
            settings: Recipient and branding configuration
        """
        self.mail_client = mail_client
        self.settings = settings

    async def notify_new_comment(
        self,
        comment: Comment,
        post: Post,
        honeypot: Optional[str] = None,
    ) -> bool:
        """Tell the administrator a comment is waiting for review.

        Nothing is sent when mail is disabled, the comment is SPAM, the
        submission carried a honeypot value, or no admin address is set.

        Returns:
            True if a message was sent
        """
        if not self.mail_client.enabled:
            return False
        if comment.status == CommentStatus.SPAM:
            return False
        if honeypot:
            return False
        if not self.settings.admin_email:
            return False

        html = _NEW_COMMENT_TEMPLATE.format(
            post_title=escape(post.title),
            author_name=escape(comment.author_name),
            author_email=escape(comment.author_email),
            content=escape(comment.content),
            created_at=_format_time(comment.created_at),
        )
        await self.mail_client.send(
            MailMessage(
                to=self.settings.admin_email,
                subject=f"[{self.settings.site_name}] New comment awaiting review: {post.title}",
                html=html,
            )
        )
        logfire.info("New comment notification sent", comment_id=comment.id)
        return True

    async def notify_reply(self, reply: Comment, parent: Comment, post: Post) -> bool:
        """Tell the author of ``parent`` that someone replied.

        Returns:
            True if a message was sent
        """
        if not self.mail_client.enabled:
            return False
        if not parent.author_email:
            return False

        html = _REPLY_TEMPLATE.format(
            post_title=escape(post.title),
            parent_content=escape(parent.content),
            reply_author=escape(reply.author_name),
            reply_content=escape(reply.content),
            created_at=_format_time(reply.created_at),
        )
        await self.mail_client.send(
            MailMessage(
                to=parent.author_email,
                subject=f"[{self.settings.site_name}] {reply.author_name} replied to your comment",
                html=html,
            )
        )
        logfire.info(
            "Reply notification sent", comment_id=reply.id, parent_id=parent.id
        )
        return True


async def dispatch(
    notify: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
) -> None:
    """Run a notification, logging instead of raising on failure."""
    try:
        await notify(*args, **kwargs)
    except Exception as e:
        logfire.error(
            "Notification failed",
            notification=getattr(notify, "__name__", repr(notify)),
            error=str(e),
        )
