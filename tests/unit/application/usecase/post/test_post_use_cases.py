"""Unit tests for CreatePostUseCase and GetPostUseCase."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from agora.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
)
from agora.domain.error import NotFoundError
from agora.domain.service import VoteService
from agora.domain.value import Score, Target, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestPostUseCases:
    """Tests for the post use cases."""

    @pytest.mark.asyncio
    async def test_create_then_get_with_viewer_score(self, unit_env):
        # Arrange
        create = await unit_env.get(CreatePostUseCase)
        get = await unit_env.get(GetPostUseCase)
        vote_service = await unit_env.get(VoteService)

        created = await create.execute(
            CreatePostRequest(
                title="Closure tables", content="Discuss", author_id=1, author_name="alice"
            )
        )
        await vote_service.dislike(UserId(2), Target.post(created.post_id))

        # Act
        as_author = await get.execute(
            GetPostRequest(post_id=created.post_id, viewer_id=1)
        )
        as_voter = await get.execute(GetPostRequest(post_id=created.post_id, viewer_id=2))
        anonymous = await get.execute(GetPostRequest(post_id=created.post_id))

        # Assert
        assert created.likes == 1
        assert as_author.viewer_score == Score.LIKE
        assert as_voter.viewer_score == Score.DISLIKE
        assert anonymous.viewer_score is None
        assert anonymous.likes == 0

    @pytest.mark.asyncio
    async def test_get_missing_post(self, unit_env):
        get = await unit_env.get(GetPostUseCase)

        with pytest.raises(NotFoundError):
            await get.execute(GetPostRequest(post_id=99))

    def test_blank_title_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            CreatePostRequest(title="", content="Body", author_id=1, author_name="alice")
