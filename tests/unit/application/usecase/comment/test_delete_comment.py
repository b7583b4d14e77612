"""Unit tests for DeleteCommentUseCase."""

import pytest

from agora.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from agora.domain.error import NotAuthorizedError, NotFoundError
from agora.domain.service import CommentService, PostService
from agora.domain.value import UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_deletes_comment_and_replies(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        use_case = await unit_env.get(DeleteCommentUseCase)
        post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
        comment = await comment_service.create_comment(post.id, UserId(2), "bob", "A")
        await comment_service.create_comment(
            post.id, UserId(3), "carol", "B", parent_id=comment.id
        )

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(comment_id=comment.id, user_id=2)
        )

        # Assert
        assert response.removed == 2
        assert response.post_id == post.id
        assert (await post_service.get_post(post.id)).num_comments == 0

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        use_case = await unit_env.get(DeleteCommentUseCase)
        post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
        comment = await comment_service.create_comment(post.id, UserId(2), "bob", "A")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteCommentRequest(comment_id=comment.id, user_id=1)
            )
        assert (await post_service.get_post(post.id)).num_comments == 1

    @pytest.mark.asyncio
    async def test_missing_comment(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(DeleteCommentRequest(comment_id=4, user_id=1))
