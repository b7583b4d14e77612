"""Unit tests for UpdateCommentUseCase."""

import pytest

from agora.application.usecase.comment import (
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from agora.domain.error import NotAuthorizedError, ValidationError
from agora.domain.service import CommentService, PostService
from agora.domain.value import UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed(unit_env):
    post_service = await unit_env.get(PostService)
    comment_service = await unit_env.get(CommentService)
    post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
    comment = await comment_service.create_comment(
        post.id, UserId(2), "bob", "Original comment"
    )
    return post, comment


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_can_update(self, unit_env):
        """Updating comment content by its author succeeds."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        post, comment = await seed(unit_env)

        # Act
        response = await use_case.execute(
            UpdateCommentRequest(
                comment_id=comment.id,
                post_id=post.id,
                user_id=2,
                content="Edited comment",
            )
        )

        # Assert
        assert response.content == "Edited comment"
        assert response.likes == 1
        assert response.author_name == "bob"

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        comment_service = await unit_env.get(CommentService)
        post, comment = await seed(unit_env)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=comment.id,
                    post_id=post.id,
                    user_id=3,
                    content="Hijacked",
                )
            )
        assert (await comment_service.get_comment(comment.id)).content == (
            "Original comment"
        )

    @pytest.mark.asyncio
    async def test_wrong_post_is_rejected(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        post, comment = await seed(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=comment.id,
                    post_id=post.id + 1,
                    user_id=2,
                    content="Edited",
                )
            )
