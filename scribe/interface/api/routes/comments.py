"""Public comment routes."""

from datetime import datetime
from typing import Optional

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, BackgroundTasks, HTTPException, Request, status
from pydantic import BaseModel

from scribe.application.notification import CommentNotifier, dispatch
from scribe.application.usecase.comment import (
    GetApprovedCommentsRequest,
    GetApprovedCommentsUseCase,
    SubmitCommentRequest,
    SubmitCommentUseCase,
)
from scribe.domain.error import NotFoundError, ValidationError
from scribe.domain.model import Comment
from scribe.domain.value import CommentStatus, SpamReason
from scribe.interface.api.deps import client_ip, parse_int

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class SubmitCommentAPIRequest(BaseModel):
    """API request for submitting a comment.

    ``website`` is the honeypot: the form hides it from people, so any
    value in it means a bot filled in the form.
    """

    author_name: str = ""
    author_email: str = ""
    content: str = ""
    parent_id: Optional[str] = None
    website: Optional[str] = None


class PublicComment(BaseModel):
    """Comment as shown to readers. Email, IP and user agent stay private."""

    id: str
    post_id: str
    parent_id: Optional[str]
    author_name: str
    content: str
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "PublicComment":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            author_name=comment.author_name,
            content=comment.content,
            created_at=comment.created_at,
        )


class SubmittedComment(PublicComment):
    """Stored submission, with the status the reader's comment landed in."""

    status: CommentStatus


class PublicThreadedComment(PublicComment):
    """Top-level comment with its approved replies."""

    replies: list[PublicComment]


class ApprovedCommentsResponse(BaseModel):
    """One page of approved comments."""

    comments: list[PublicThreadedComment]
    total: int
    page: int
    limit: int
    total_pages: int


@router.post(
    "/{post_id}/comments",
    response_model=SubmittedComment,
    status_code=status.HTTP_201_CREATED,
)
async def submit_comment(
    post_id: str,
    body: SubmitCommentAPIRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    submit_comment_use_case: FromDishka[SubmitCommentUseCase],
    notifier: FromDishka[CommentNotifier],
) -> SubmittedComment:
    """Submit a comment on a published post.

    The submission passes the anti-spam checks first; a rate limited
    client gets 429, any other rejection 400. Accepted comments are stored
    PENDING unless auto-approval is on, and the administrator is notified
    in the background.

    Raises:
        HTTPException: On anti-spam rejection, validation failure, or a
            missing or unpublished post
    """
    try:
        result = await submit_comment_use_case.execute(
            SubmitCommentRequest(
                post_id=post_id,
                author_name=body.author_name,
                author_email=body.author_email,
                content=body.content,
                parent_id=body.parent_id or None,
                honeypot=body.website,
                ip_address=client_ip(request),
                user_agent=request.headers.get("user-agent"),
            )
        )
    except NotFoundError as e:
        logfire.warn("Comment submission failed - not found", post_id=post_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not result.accepted:
        if result.anti_spam.reason == SpamReason.RATE_LIMIT:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many comments, please try again later",
            )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Comment did not pass validation",
        )

    comment = result.comment
    if result.post is not None:
        background_tasks.add_task(
            dispatch,
            notifier.notify_new_comment,
            comment,
            result.post,
            honeypot=body.website,
        )

    return SubmittedComment(
        **PublicComment.from_comment(comment).model_dump(), status=comment.status
    )


@router.get("/{post_id}/comments", response_model=ApprovedCommentsResponse)
async def get_approved_comments(
    post_id: str,
    get_approved_comments_use_case: FromDishka[GetApprovedCommentsUseCase],
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ApprovedCommentsResponse:
    """Get the approved comments of a post, threaded, oldest first.

    Malformed or out of range paging parameters fall back to defaults.
    """
    result = await get_approved_comments_use_case.execute(
        GetApprovedCommentsRequest(
            post_id=post_id,
            page=parse_int(page, 1),
            limit=parse_int(limit, get_approved_comments_use_case.default_page_size),
        )
    )
    return ApprovedCommentsResponse(
        comments=[
            PublicThreadedComment(
                **PublicComment.from_comment(comment).model_dump(),
                replies=[PublicComment.from_comment(r) for r in comment.replies],
            )
            for comment in result.comments
        ],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )
