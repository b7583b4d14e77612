"""Unit tests for SaveService."""

import asyncio

import pytest

from agora.domain.error import NotFoundError
from agora.domain.repository import SaveRepository
from agora.domain.service import CommentService, PostService, SaveService
from agora.domain.value import Target, TargetKind, UserId
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemorySaveRepository,
    InMemoryUnitOfWork,
    InMemoryVoteRepository,
)
from tests.harness import create_env_fixture
from tests.spies import CallLog, RecordingRepository

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

READER = UserId(7)


class TestSave:
    """Tests for save() and unsave()."""

    @pytest.mark.asyncio
    async def test_save_then_unsave(self, unit_env):
        """A save is recorded and removed again."""
        # Arrange
        post_service = await unit_env.get(PostService)
        save_service = await unit_env.get(SaveService)
        save_repo = await unit_env.get(SaveRepository)
        post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
        target = Target.post(post.id)

        # Act & Assert
        assert await save_service.save(READER, target) is True
        assert await save_repo.exists(READER, target)

        assert await save_service.unsave(READER, target) is True
        assert not await save_repo.exists(READER, target)

    @pytest.mark.asyncio
    async def test_save_is_idempotent(self, unit_env):
        """Saving a saved target changes nothing."""
        # Arrange
        post_service = await unit_env.get(PostService)
        save_service = await unit_env.get(SaveService)
        post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
        target = Target.post(post.id)
        await save_service.save(READER, target)

        # Act
        changed = await save_service.save(READER, target)

        # Assert
        assert changed is False

    @pytest.mark.asyncio
    async def test_unsave_when_not_saved_is_noop(self, unit_env):
        """Unsaving an unsaved target reports no change."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        save_service = await unit_env.get(SaveService)
        post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
        comment = await comment_service.create_comment(post.id, UserId(2), "bob", "Hi")

        # Act
        changed = await save_service.unsave(READER, Target.comment(comment.id))

        # Assert
        assert changed is False

    @pytest.mark.asyncio
    async def test_save_missing_target_raises_not_found(self, unit_env):
        save_service = await unit_env.get(SaveService)

        with pytest.raises(NotFoundError):
            await save_service.save(READER, Target.comment(12345))


def build_interleaved(store, log=None):
    """Save and comment services whose transactions interleave."""
    post_repo = InMemoryPostRepository(store)
    comment_repo = InMemoryCommentRepository(store)
    save_repo = InMemorySaveRepository(store)
    if log is not None:
        post_repo = RecordingRepository("post", post_repo, log)
        comment_repo = RecordingRepository("comment", comment_repo, log)
        save_repo = RecordingRepository("save", save_repo, log)
    unit_of_work = InMemoryUnitOfWork(store, serialize=False)
    save_service = SaveService(
        unit_of_work=unit_of_work,
        save_repository=save_repo,
        post_repository=post_repo,
        comment_repository=comment_repo,
    )
    comment_service = CommentService(
        unit_of_work=unit_of_work,
        comment_repository=comment_repo,
        post_repository=post_repo,
        vote_repository=InMemoryVoteRepository(store),
        save_repository=save_repo,
    )
    return save_service, comment_service


class TestConcurrentSaves:
    """Save toggles racing each other and deletes."""

    @pytest.mark.asyncio
    async def test_save_locks_target_before_checking_record(self, store):
        # Arrange
        post = await InMemoryPostRepository(store).insert(UserId(1), "alice", "T", "B")
        log = CallLog()
        save_service, _ = build_interleaved(store, log)

        # Act
        await save_service.save(READER, Target.post(post.id))
        await save_service.unsave(READER, Target.post(post.id))

        # Assert
        assert log.names() == [
            "post.lock",
            "save.exists",
            "save.insert",
            "post.lock",
            "save.exists",
            "save.delete",
        ]

    @pytest.mark.asyncio
    async def test_concurrent_saves_store_one_record(self, store):
        """Only one of several simultaneous saves changes state."""
        # Arrange
        post = await InMemoryPostRepository(store).insert(UserId(1), "alice", "T", "B")
        save_service, _ = build_interleaved(store)

        # Act
        results = await asyncio.gather(
            *(save_service.save(READER, Target.post(post.id)) for _ in range(5))
        )

        # Assert
        assert results.count(True) == 1
        assert list(store.saves) == [(READER, TargetKind.POST, post.id)]

    @pytest.mark.asyncio
    async def test_save_racing_delete_leaves_no_record(self, store):
        """A save that races the comment's deletion is removed with it or refused."""
        # Arrange
        author = UserId(1)
        post = await InMemoryPostRepository(store).insert(author, "alice", "T", "B")
        comment_repo = InMemoryCommentRepository(store)
        comment = await comment_repo.insert(post.id, author, "alice", "Hi")
        await comment_repo.insert_closure_edges(comment.id, None)
        await InMemoryPostRepository(store).adjust_comment_count(post.id, 1)
        save_service, comment_service = build_interleaved(store)

        # Act
        saved, deleted = await asyncio.gather(
            save_service.save(READER, Target.comment(comment.id)),
            comment_service.delete_comment(comment.id, author),
            return_exceptions=True,
        )

        # Assert
        assert saved is True or isinstance(saved, NotFoundError)
        assert deleted[1] == 1
        assert store.comments == {}
        assert store.saves == {}


class TestSavedTargets:
    """Tests for saved_posts() and saved_comments()."""

    @pytest.mark.asyncio
    async def test_saved_posts_newest_first(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        save_service = await unit_env.get(SaveService)
        older = await post_service.create_post(UserId(1), "alice", "Old", "Body")
        newer = await post_service.create_post(UserId(1), "alice", "New", "Body")
        dropped = await post_service.create_post(UserId(1), "alice", "Gone", "Body")
        await save_service.save(READER, Target.post(older.id))
        await save_service.save(READER, Target.post(newer.id))
        await save_service.save(READER, Target.post(dropped.id))
        await save_service.unsave(READER, Target.post(dropped.id))

        # Act
        saved = await save_service.saved_posts(READER)

        # Assert
        assert [post.id for post in saved] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_saved_comments_only_lists_comments(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        save_service = await unit_env.get(SaveService)
        post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
        comment = await comment_service.create_comment(post.id, UserId(2), "bob", "Hi")
        await save_service.save(READER, Target.post(post.id))
        await save_service.save(READER, Target.comment(comment.id))

        # Act
        saved = await save_service.saved_comments(READER)

        # Assert
        assert [c.id for c in saved] == [comment.id]
        assert await save_service.saved_comments(UserId(99)) == []
