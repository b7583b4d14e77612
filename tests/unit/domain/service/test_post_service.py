"""Unit tests for PostService."""

import pytest

from agora.domain.error import NotAuthorizedError, NotFoundError
from agora.domain.repository import (
    CommentRepository,
    SaveRepository,
    VoteRepository,
)
from agora.domain.service import CommentService, PostService, SaveService, VoteService
from agora.domain.value import PostId, Score, Target, TargetKind, UserId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

AUTHOR = UserId(1)
READER = UserId(2)


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_post_records_author_like(self, unit_env):
        """A new post starts with the author's like and no comments."""
        # Arrange
        post_service = await unit_env.get(PostService)
        vote_repo = await unit_env.get(VoteRepository)

        # Act
        post = await post_service.create_post(
            UserId(1), "alice", "Closure tables", "Why not ltree?"
        )

        # Assert
        assert post.likes == 1
        assert post.num_comments == 0
        assert await vote_repo.find_score(UserId(1), Target.post(post.id)) == Score.LIKE

        stored = await post_service.get_post(post.id)
        assert stored.likes == 1
        assert stored.title == "Closure tables"


class TestGetPost:
    """Tests for get_post and update_post."""

    @pytest.mark.asyncio
    async def test_get_missing_post_raises_not_found(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError, match="Post not found"):
            await post_service.get_post(PostId(42))

    @pytest.mark.asyncio
    async def test_update_post_changes_title_and_content(self, unit_env):
        """Updating keeps counters and replaces the text."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.create_post(UserId(1), "alice", "Old", "Old body")

        # Act
        updated = await post_service.update_post(post.id, "New", "New body")

        # Assert
        assert updated.title == "New"
        assert updated.content == "New body"
        assert updated.likes == 1
        assert updated.updated_at >= post.updated_at

    @pytest.mark.asyncio
    async def test_update_missing_post_raises_not_found(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.update_post(PostId(42), "New", "New body")


class TestDeletePost:
    """Tests for delete_post."""

    @pytest.mark.asyncio
    async def test_delete_cascades_to_comments_votes_and_saves(self, unit_env):
        """Everything hanging off the post goes; other posts are untouched."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        save_service = await unit_env.get(SaveService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        save_repo = await unit_env.get(SaveRepository)

        post = await post_service.create_post(AUTHOR, "alice", "Doomed", "Body")
        other = await post_service.create_post(AUTHOR, "alice", "Kept", "Body")
        root = await comment_service.create_comment(post.id, READER, "bob", "A")
        reply = await comment_service.create_comment(
            post.id, AUTHOR, "alice", "B", parent_id=root.id
        )
        kept = await comment_service.create_comment(other.id, READER, "bob", "C")
        await vote_service.like(READER, Target.post(post.id))
        await vote_service.dislike(READER, Target.comment(reply.id))
        await save_service.save(READER, Target.post(post.id))
        await save_service.save(READER, Target.comment(root.id))
        await save_service.save(READER, Target.comment(kept.id))

        # Act
        removed = await post_service.delete_post(post.id, AUTHOR)

        # Assert
        assert removed == 2
        with pytest.raises(NotFoundError):
            await post_service.get_post(post.id)
        assert await comment_repo.find_by_id(root.id) is None
        assert await comment_repo.find_subtree_ids(root.id) == []
        assert await vote_repo.find_scores(READER, TargetKind.POST, [post.id]) == {}
        assert (
            await vote_repo.find_scores(READER, TargetKind.COMMENT, [root.id, reply.id])
            == {}
        )
        assert [c.id for c in await save_repo.find_saved_comments(READER)] == [kept.id]
        assert await save_repo.find_saved_posts(READER) == []
        assert (await post_service.get_post(other.id)).num_comments == 1

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        post = await post_service.create_post(AUTHOR, "alice", "Title", "Body")
        await comment_service.create_comment(post.id, READER, "bob", "A")

        # Act
        with pytest.raises(NotAuthorizedError):
            await post_service.delete_post(post.id, READER)

        # Assert
        assert (await post_service.get_post(post.id)).num_comments == 1

    @pytest.mark.asyncio
    async def test_delete_missing_post_raises_not_found(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.delete_post(PostId(42), AUTHOR)
