"""Unit tests for CommentService."""

from datetime import timedelta

import pytest

from scribe.domain.error import (
    BatchLimitExceededError,
    NotFoundError,
    PostNotPublishedError,
    ValidationError,
)
from scribe.domain.model.common import utcnow
from scribe.domain.repository import (
    CommentRepository,
    PostRepository,
    SiteSettingRepository,
)
from scribe.domain.service import CommentService, NewComment, resolve_effective_parent
from scribe.domain.service.comment_service import start_of_today_utc
from scribe.domain.value import (
    AdminUser,
    AdminUserId,
    BatchAction,
    CommentId,
    CommentStatus,
    PostId,
    PostStatus,
)
from tests.conftest import auto_approve, make_comment, make_post, minutes_ago
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

ADMIN = AdminUser(id=AdminUserId("admin"), name="Editor", email="editor@example.com")


def _new_comment(post_id: PostId, **overrides) -> NewComment:
    fields = dict(
        post_id=post_id,
        author_name="Alice",
        author_email="alice@example.com",
        content="Great article!",
        ip_address="192.0.2.1",
        user_agent="pytest",
    )
    fields.update(overrides)
    return NewComment(**fields)


async def _published_post(env):
    post = make_post()
    await (await env.get(PostRepository)).save(post)
    return post


class TestResolveEffectiveParent:
    """Tests for resolve_effective_parent."""

    def test_top_level_target_is_its_own_parent(self):
        top = make_comment(PostId("p"))

        assert resolve_effective_parent(top) == top.id

    def test_reply_target_resolves_to_grandparent(self):
        top = make_comment(PostId("p"))
        reply = make_comment(PostId("p"), parent_id=top.id)

        assert resolve_effective_parent(reply) == top.id


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_creates_pending_comment(self, unit_env):
        """Without the auto-approve setting new comments wait for review."""
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post = await _published_post(unit_env)

        comment = await service.create_comment(_new_comment(post.id))

        assert comment.status == CommentStatus.PENDING
        assert comment.parent_id is None
        assert comment.ip_address == "192.0.2.1"
        assert comment.user_agent == "pytest"
        assert await repo.find_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_stores_trimmed_fields(self, unit_env):
        service = await unit_env.get(CommentService)
        post = await _published_post(unit_env)

        comment = await service.create_comment(
            _new_comment(
                post.id,
                author_name="  Alice ",
                author_email=" alice@example.com ",
                content="\n Hello \n",
            )
        )

        assert comment.author_name == "Alice"
        assert comment.author_email == "alice@example.com"
        assert comment.content == "Hello"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"author_name": "  "}, "Author name is required"),
            ({"author_email": ""}, "Email is required"),
            ({"content": "   "}, "Content is required"),
            ({"author_email": "not-an-email"}, "Invalid email format"),
            ({"author_email": "a@b"}, "Invalid email format"),
            ({"author_email": "a b@example.com"}, "Invalid email format"),
            ({"author_name": "a" * 101}, "Author name must be at most 100 characters"),
            (
                {"author_email": "a" * 250 + "@example.com"},
                "Email must be at most 255 characters",
            ),
        ],
    )
    async def test_field_validation(self, unit_env, overrides, message):
        service = await unit_env.get(CommentService)
        post = await _published_post(unit_env)

        with pytest.raises(ValidationError, match=message):
            await service.create_comment(_new_comment(post.id, **overrides))

    @pytest.mark.asyncio
    async def test_name_and_email_at_column_width_accepted(self, unit_env):
        service = await unit_env.get(CommentService)
        post = await _published_post(unit_env)
        email = "a" * 243 + "@example.com"

        comment = await service.create_comment(
            _new_comment(post.id, author_name="n" * 100, author_email=email)
        )

        assert len(comment.author_name) == 100
        assert len(comment.author_email) == 255

    @pytest.mark.asyncio
    async def test_field_checks_run_before_post_lookup(self, unit_env):
        """A blank name on a missing post reports the name."""
        service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="Author name is required"):
            await service.create_comment(
                _new_comment(PostId("missing"), author_name="")
            )

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError, match="Post not found"):
            await service.create_comment(_new_comment(PostId("missing")))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [PostStatus.DRAFT, PostStatus.ARCHIVED])
    async def test_unpublished_post(self, unit_env, status):
        service = await unit_env.get(CommentService)
        post = make_post(status=status)
        await (await unit_env.get(PostRepository)).save(post)

        with pytest.raises(PostNotPublishedError, match="Cannot comment on unpublished post"):
            await service.create_comment(_new_comment(post.id))

    @pytest.mark.asyncio
    async def test_missing_parent(self, unit_env):
        service = await unit_env.get(CommentService)
        post = await _published_post(unit_env)

        with pytest.raises(NotFoundError, match="Parent comment not found"):
            await service.create_comment(
                _new_comment(post.id, parent_id=CommentId("missing"))
            )

    @pytest.mark.asyncio
    async def test_reply_to_top_level_comment(self, unit_env):
        service = await unit_env.get(CommentService)
        post = await _published_post(unit_env)
        top = await service.create_comment(_new_comment(post.id))

        reply = await service.create_comment(_new_comment(post.id, parent_id=top.id))

        assert reply.parent_id == top.id

    @pytest.mark.asyncio
    async def test_reply_to_reply_is_flattened(self, unit_env):
        """Threads stay two tiers deep: A <- B <- C becomes A <- C."""
        service = await unit_env.get(CommentService)
        post = await _published_post(unit_env)
        a = await service.create_comment(_new_comment(post.id))
        b = await service.create_comment(_new_comment(post.id, parent_id=a.id))

        c = await service.create_comment(_new_comment(post.id, parent_id=b.id))

        assert c.parent_id == a.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", CommentStatus.APPROVED),
            ("false", CommentStatus.PENDING),
            ("TRUE", CommentStatus.PENDING),
            ("1", CommentStatus.PENDING),
        ],
    )
    async def test_auto_approve_setting(self, unit_env, value, expected):
        """Only the exact string "true" enables auto-approval."""
        service = await unit_env.get(CommentService)
        await (await unit_env.get(SiteSettingRepository)).save(auto_approve(value))
        post = await _published_post(unit_env)

        comment = await service.create_comment(_new_comment(post.id))

        assert comment.status == expected


class TestGetApprovedComments:
    """Tests for get_approved_comments."""

    @pytest.mark.asyncio
    async def test_groups_approved_replies_under_parents(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post_id = PostId("post-1")

        first = make_comment(post_id, created_at=minutes_ago(30))
        second = make_comment(post_id, created_at=minutes_ago(20))
        reply_late = make_comment(post_id, parent_id=first.id, created_at=minutes_ago(5))
        reply_early = make_comment(post_id, parent_id=first.id, created_at=minutes_ago(10))
        pending_reply = make_comment(
            post_id, parent_id=first.id, status=CommentStatus.PENDING
        )
        for c in (second, reply_late, first, pending_reply, reply_early):
            await repo.save(c)

        page = await service.get_approved_comments(post_id)

        assert [c.id for c in page.comments] == [first.id, second.id]
        assert [r.id for r in page.comments[0].replies] == [reply_early.id, reply_late.id]
        assert page.comments[1].replies == []
        assert page.total == 2
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_excludes_other_statuses_and_posts(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post_id = PostId("post-1")

        await repo.save(make_comment(post_id, status=CommentStatus.PENDING))
        await repo.save(make_comment(post_id, status=CommentStatus.SPAM))
        await repo.save(make_comment(post_id, status=CommentStatus.DELETED))
        await repo.save(make_comment(PostId("post-2")))

        page = await service.get_approved_comments(post_id)

        assert page.comments == []
        assert page.total == 0
        assert page.total_pages == 0

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post_id = PostId("post-1")
        comments = [
            make_comment(post_id, created_at=minutes_ago(60 - i)) for i in range(25)
        ]
        for c in comments:
            await repo.save(c)

        page = await service.get_approved_comments(post_id, page=3, limit=10)

        assert [c.id for c in page.comments] == [c.id for c in comments[20:]]
        assert page.total == 25
        assert page.total_pages == 3
        assert page.page == 3
        assert page.limit == 10

    @pytest.mark.asyncio
    async def test_page_past_the_end_keeps_total(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post_id = PostId("post-1")
        await repo.save(make_comment(post_id))

        page = await service.get_approved_comments(post_id, page=5, limit=10)

        assert page.comments == []
        assert page.total == 1
        assert page.total_pages == 1


class TestGetAdminComments:
    """Tests for get_admin_comments."""

    @pytest.mark.asyncio
    async def test_newest_first_with_post_summary(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post = await _published_post(unit_env)

        old = make_comment(post.id, status=CommentStatus.PENDING, created_at=minutes_ago(10))
        new = make_comment(post.id, status=CommentStatus.SPAM, created_at=minutes_ago(1))
        await repo.save(old)
        await repo.save(new)

        page = await service.get_admin_comments()

        assert [c.id for c in page.comments] == [new.id, old.id]
        assert page.comments[0].post.title == post.title
        assert page.comments[0].post.slug == post.slug
        assert page.total == 2

    @pytest.mark.asyncio
    async def test_status_filter(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post = await _published_post(unit_env)
        pending = make_comment(post.id, status=CommentStatus.PENDING)
        await repo.save(pending)
        await repo.save(make_comment(post.id, status=CommentStatus.APPROVED))

        page = await service.get_admin_comments(status=CommentStatus.PENDING)

        assert [c.id for c in page.comments] == [pending.id]
        assert page.total == 1


class TestUpdateCommentStatus:
    """Tests for update_comment_status."""

    @pytest.mark.asyncio
    async def test_missing_comment_returns_none(self, unit_env):
        service = await unit_env.get(CommentService)

        assert await service.update_comment_status(
            CommentId("missing"), CommentStatus.APPROVED
        ) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("start", list(CommentStatus))
    @pytest.mark.parametrize("target", list(CommentStatus))
    async def test_any_status_to_any_status(self, unit_env, start, target):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comment = make_comment(PostId("p"), status=start)
        await repo.save(comment)

        updated = await service.update_comment_status(comment.id, target)

        assert updated.status == target
        assert (await repo.find_by_id(comment.id)).status == target


class TestDeleteComment:
    """Tests for delete_comment."""

    @pytest.mark.asyncio
    async def test_soft_delete_keeps_record(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comment = make_comment(PostId("p"))
        await repo.save(comment)

        deleted = await service.delete_comment(comment.id)

        assert deleted.status == CommentStatus.DELETED
        assert (await repo.find_by_id(comment.id)).status == CommentStatus.DELETED

    @pytest.mark.asyncio
    async def test_soft_delete_is_idempotent(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comment = make_comment(PostId("p"))
        await repo.save(comment)

        await service.delete_comment(comment.id)
        again = await service.delete_comment(comment.id)

        assert again.status == CommentStatus.DELETED

    @pytest.mark.asyncio
    async def test_hard_delete_removes_comment_and_replies(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        top = make_comment(PostId("p"))
        reply = make_comment(PostId("p"), parent_id=top.id)
        sibling = make_comment(PostId("p"))
        for c in (top, reply, sibling):
            await repo.save(c)

        removed = await service.delete_comment(top.id, hard=True)

        assert removed.id == top.id
        assert await repo.find_by_id(top.id) is None
        assert await repo.find_by_id(reply.id) is None
        assert await repo.find_by_id(sibling.id) is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hard", [False, True])
    async def test_missing_comment(self, unit_env, hard):
        service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError, match="Comment not found"):
            await service.delete_comment(CommentId("missing"), hard=hard)


class TestCreateAdminReply:
    """Tests for create_admin_reply."""

    @pytest.mark.asyncio
    async def test_reply_is_approved_and_carries_admin_identity(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        parent = make_comment(PostId("p"), status=CommentStatus.PENDING)
        await repo.save(parent)

        reply = await service.create_admin_reply(parent.id, "Thanks!", ADMIN)

        assert reply.status == CommentStatus.APPROVED
        assert reply.post_id == parent.post_id
        assert reply.parent_id == parent.id
        assert reply.author_name == "Editor"
        assert reply.author_email == "editor@example.com"
        assert reply.ip_address is None
        assert reply.user_agent is None

    @pytest.mark.asyncio
    async def test_reply_to_reply_is_not_flattened(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        top = make_comment(PostId("p"))
        child = make_comment(PostId("p"), parent_id=top.id)
        await repo.save(top)
        await repo.save(child)

        reply = await service.create_admin_reply(child.id, "Noted", ADMIN)

        assert reply.parent_id == child.id

    @pytest.mark.asyncio
    async def test_missing_parent(self, unit_env):
        service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError, match="Parent comment not found"):
            await service.create_admin_reply(CommentId("missing"), "Hi", ADMIN)


class TestBatchUpdateComments:
    """Tests for batch_update_comments."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "action,expected",
        [
            (BatchAction.APPROVE, CommentStatus.APPROVED),
            (BatchAction.SPAM, CommentStatus.SPAM),
            (BatchAction.DELETE, CommentStatus.DELETED),
        ],
    )
    async def test_applies_action(self, unit_env, action, expected):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comments = [make_comment(PostId("p"), status=CommentStatus.PENDING) for _ in range(3)]
        for c in comments:
            await repo.save(c)

        updated = await service.batch_update_comments([c.id for c in comments], action)

        assert updated == 3
        for c in comments:
            assert (await repo.find_by_id(c.id)).status == expected

    @pytest.mark.asyncio
    async def test_batch_delete_is_soft(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comment = make_comment(PostId("p"))
        await repo.save(comment)

        await service.batch_update_comments([comment.id], BatchAction.DELETE)

        assert await repo.find_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_empty_list_updates_nothing(self, unit_env):
        service = await unit_env.get(CommentService)

        assert await service.batch_update_comments([], BatchAction.APPROVE) == 0

    @pytest.mark.asyncio
    async def test_unknown_ids_are_not_counted(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comment = make_comment(PostId("p"), status=CommentStatus.PENDING)
        await repo.save(comment)

        updated = await service.batch_update_comments(
            [comment.id, CommentId("missing")], BatchAction.APPROVE
        )

        assert updated == 1

    @pytest.mark.asyncio
    async def test_fifty_ids_allowed(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comments = [make_comment(PostId("p"), status=CommentStatus.PENDING) for _ in range(50)]
        for c in comments:
            await repo.save(c)

        assert await service.batch_update_comments(
            [c.id for c in comments], BatchAction.APPROVE
        ) == 50

    @pytest.mark.asyncio
    async def test_fifty_one_ids_rejected_without_writes(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comments = [make_comment(PostId("p"), status=CommentStatus.PENDING) for _ in range(51)]
        for c in comments:
            await repo.save(c)

        with pytest.raises(
            BatchLimitExceededError,
            match="Cannot batch update more than 50 comments at once",
        ):
            await service.batch_update_comments([c.id for c in comments], BatchAction.SPAM)

        for c in comments:
            assert (await repo.find_by_id(c.id)).status == CommentStatus.PENDING


class TestGetCommentStats:
    """Tests for get_comment_stats."""

    @pytest.mark.asyncio
    async def test_counts(self, unit_env):
        service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        post_id = PostId("p")
        yesterday = start_of_today_utc() - timedelta(hours=1)

        await repo.save(make_comment(post_id, status=CommentStatus.PENDING))
        await repo.save(make_comment(post_id, status=CommentStatus.PENDING, created_at=yesterday))
        await repo.save(make_comment(post_id, status=CommentStatus.APPROVED))
        await repo.save(make_comment(post_id, status=CommentStatus.SPAM, created_at=yesterday))
        await repo.save(make_comment(post_id, status=CommentStatus.DELETED))

        stats = await service.get_comment_stats()

        assert stats.pending == 2
        assert stats.approved == 1
        assert stats.spam == 1
        # Today counts every status, DELETED included
        assert stats.today_new == 3

    def test_start_of_today_is_utc_midnight(self):
        start = start_of_today_utc(utcnow())

        assert (start.hour, start.minute, start.second, start.microsecond) == (0, 0, 0, 0)
        assert start.utcoffset() == timedelta(0)
