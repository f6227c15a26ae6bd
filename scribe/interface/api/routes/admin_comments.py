"""Admin comment moderation routes.

Every route requires ``Authorization: Bearer <ADMIN__API_TOKEN>``. Fixed
paths (``/batch``, ``/stats``) are registered before ``/{comment_id}``.
"""

from typing import Annotated, Optional

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, BackgroundTasks, HTTPException, Query, Request, status
from pydantic import BaseModel, StringConstraints

from scribe.application.notification import CommentNotifier, dispatch
from scribe.application.usecase.comment import (
    BatchUpdateCommentsRequest,
    BatchUpdateCommentsResponse,
    BatchUpdateCommentsUseCase,
    CreateAdminReplyRequest,
    CreateAdminReplyUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetAdminCommentsRequest,
    GetAdminCommentsUseCase,
    GetCommentStatsUseCase,
    UpdateCommentStatusRequest,
    UpdateCommentStatusUseCase,
)
from scribe.domain.error import NotFoundError, ValidationError
from scribe.domain.model import Comment
from scribe.domain.service import AdminAuthService, AdminCommentsPage
from scribe.domain.value import BatchAction, CommentStats, CommentStatus
from scribe.interface.api.deps import authorize_admin, parse_int

router = APIRouter(prefix="/admin/comments", tags=["admin"], route_class=DishkaRoute)


class UpdateStatusAPIRequest(BaseModel):
    """API request for moderating one comment."""

    status: CommentStatus


class BatchUpdateAPIRequest(BaseModel):
    """API request for bulk moderation."""

    ids: list[str]
    action: BatchAction


class AdminReplyAPIRequest(BaseModel):
    """API request for an admin reply."""

    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


@router.get("", response_model=AdminCommentsPage)
async def list_comments(
    request: Request,
    admin_auth_service: FromDishka[AdminAuthService],
    get_admin_comments_use_case: FromDishka[GetAdminCommentsUseCase],
    status_filter: Optional[str] = Query(default=None, alias="status"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> AdminCommentsPage:
    """List comments across all posts, newest first.

    ``status`` filters on one status; an unknown value lists everything.
    """
    authorize_admin(request, admin_auth_service)
    return await get_admin_comments_use_case.execute(
        GetAdminCommentsRequest(
            status=status_filter,
            page=parse_int(page, 1),
            limit=parse_int(limit, get_admin_comments_use_case.default_page_size),
        )
    )


@router.get("/stats", response_model=CommentStats)
async def get_stats(
    request: Request,
    admin_auth_service: FromDishka[AdminAuthService],
    get_comment_stats_use_case: FromDishka[GetCommentStatsUseCase],
) -> CommentStats:
    """Dashboard counters: pending, new today (UTC), approved and spam."""
    authorize_admin(request, admin_auth_service)
    return await get_comment_stats_use_case.execute()


@router.put("/batch", response_model=BatchUpdateCommentsResponse)
async def batch_update(
    body: BatchUpdateAPIRequest,
    request: Request,
    admin_auth_service: FromDishka[AdminAuthService],
    batch_update_comments_use_case: FromDishka[BatchUpdateCommentsUseCase],
) -> BatchUpdateCommentsResponse:
    """Approve, mark as spam or soft delete many comments at once."""
    authorize_admin(request, admin_auth_service)
    try:
        return await batch_update_comments_use_case.execute(
            BatchUpdateCommentsRequest(ids=body.ids, action=body.action)
        )
    except ValidationError as e:
        logfire.warn("Batch update rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{comment_id}", response_model=Comment)
async def update_status(
    comment_id: str,
    body: UpdateStatusAPIRequest,
    request: Request,
    admin_auth_service: FromDishka[AdminAuthService],
    update_comment_status_use_case: FromDishka[UpdateCommentStatusUseCase],
) -> Comment:
    """Set the moderation status of one comment."""
    authorize_admin(request, admin_auth_service)
    comment = await update_comment_status_use_case.execute(
        UpdateCommentStatusRequest(comment_id=comment_id, status=body.status)
    )
    if comment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found"
        )
    return comment


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    request: Request,
    admin_auth_service: FromDishka[AdminAuthService],
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    hard: bool = False,
) -> DeleteCommentResponse:
    """Delete a comment; soft by default, ``?hard=true`` removes the record."""
    authorize_admin(request, admin_auth_service)
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, hard=hard)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/{comment_id}/reply",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
)
async def reply(
    comment_id: str,
    body: AdminReplyAPIRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    admin_auth_service: FromDishka[AdminAuthService],
    create_admin_reply_use_case: FromDishka[CreateAdminReplyUseCase],
    notifier: FromDishka[CommentNotifier],
) -> Comment:
    """Reply to a comment as the administrator.

    The reply is published immediately and the comment's author is
    notified in the background.
    """
    admin = authorize_admin(request, admin_auth_service)
    try:
        result = await create_admin_reply_use_case.execute(
            CreateAdminReplyRequest(comment_id=comment_id, content=body.content, admin=admin)
        )
    except NotFoundError as e:
        logfire.warn("Admin reply failed - not found", comment_id=comment_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if result.post is not None:
        background_tasks.add_task(
            dispatch, notifier.notify_reply, result.reply, result.parent, result.post
        )
    return result.reply
