"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from scribe.domain.model import AdminComment, Comment, Post, SiteSetting
from scribe.domain.value import (
    CommentId,
    CommentStatus,
    PostId,
    PostStatus,
    PostSummary,
)


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        author_name=row["author_name"],
        author_email=row["author_email"],
        content=row["content"],
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        status=CommentStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_admin_comment(row: Dict[str, Any]) -> AdminComment:
    """Convert a comments/posts join row to AdminComment.

    Expects the post columns labelled ``post_title`` and ``post_slug``.
    """
    comment = row_to_comment(row)
    post = None
    if row.get("post_title") is not None:
        post = PostSummary(
            id=comment.post_id,
            title=row["post_title"],
            slug=row["post_slug"],
        )
    return AdminComment(**comment.model_dump(), post=post)


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump(include=set(Comment.model_fields))
    data["status"] = comment.status.value
    return data


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        slug=row["slug"],
        status=PostStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    data = post.model_dump()
    data["status"] = post.status.value
    return data


def row_to_setting(row: Dict[str, Any]) -> SiteSetting:
    """Convert database row to SiteSetting domain model."""
    return SiteSetting(
        key=row["key"],
        value=row["value"],
        updated_at=row["updated_at"],
    )
