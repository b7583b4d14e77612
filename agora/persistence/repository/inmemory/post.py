"""In-memory post repository for testing."""

from datetime import UTC, datetime
from typing import Optional

from agora.domain.error import ConstraintViolationError
from agora.domain.model.post import Post
from agora.domain.repository.post import PostRepository
from agora.domain.value import PostId, UserId

from .store import InMemoryStore


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        await self.store.checkpoint()
        return self.store.posts.get(post_id)

    async def insert(
        self, author_id: UserId, author_name: str, title: str, content: str
    ) -> Post:
        """Insert a new post."""
        await self.store.checkpoint()
        now = datetime.now(UTC)
        post = Post(
            id=PostId(self.store.next_id("posts")),
            author_id=author_id,
            author_name=author_name,
            title=title,
            content=content,
            likes=0,
            num_comments=0,
            created_at=now,
            updated_at=now,
        )
        self.store.posts[post.id] = post
        return post

    async def update(self, post_id: PostId, title: str, content: str) -> Optional[Post]:
        """Update title and content."""
        await self.store.checkpoint()
        post = self.store.posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(
            update={"title": title, "content": content, "updated_at": datetime.now(UTC)}
        )
        self.store.posts[post_id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row."""
        await self.store.checkpoint()
        return self.store.posts.pop(post_id, None) is not None

    async def lock(self, target_id: int) -> bool:
        """Take the post's row lock, then report whether it still exists."""
        await self.store.checkpoint()
        await self.store.lock_row(("posts", target_id))
        return PostId(target_id) in self.store.posts

    async def adjust_likes(self, target_id: int, delta: int) -> None:
        """Add delta to the like counter."""
        await self.store.checkpoint()
        post = self.store.posts.get(PostId(target_id))
        if post:
            self.store.posts[post.id] = post.model_copy(
                update={"likes": post.likes + delta}
            )

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Add delta to num_comments."""
        await self.store.checkpoint()
        post = self.store.posts.get(post_id)
        if post:
            if post.num_comments + delta < 0:
                raise ConstraintViolationError("num_comments_non_negative")
            self.store.posts[post_id] = post.model_copy(
                update={"num_comments": post.num_comments + delta}
            )
