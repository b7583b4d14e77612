"""Create post use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import PostService
from agora.domain.value import UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    author_id: int  # User ID from authenticated user
    author_name: str


class PostResponse(BaseModel):
    """Post details."""

    post_id: int
    author_id: int
    author_name: str
    title: str
    content: str
    likes: int
    num_comments: int
    created_at: datetime
    updated_at: datetime


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute create post flow.

        The author's like is recorded with the post.

        Args:
            request: Create post request

        Returns:
            Created post
        """
        post = await self.post_service.create_post(
            author_id=UserId(request.author_id),
            author_name=request.author_name,
            title=request.title,
            content=request.content,
        )

        return PostResponse(
            post_id=post.id,
            author_id=post.author_id,
            author_name=post.author_name,
            title=post.title,
            content=post.content,
            likes=post.likes,
            num_comments=post.num_comments,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
