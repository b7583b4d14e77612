"""Comment thread reconstruction.

Threads are stored in a closure table and read back as flat rows ordered by
breadcrumb. Because a breadcrumb is the root-to-node chain of ids, that
order is a preorder traversal of every top-level comment's subtree, one
subtree after another. ``build_forest`` rebuilds the nesting in one pass
by keeping a stack of the nodes on the path from the current root.
"""

from collections.abc import Iterable

import logfire

from agora.domain.error import (
    MalformedThreadError,
    NoCommentsForPostError,
    NotFoundError,
)
from agora.domain.model.thread import CommentForest, CommentNode, CommentRow
from agora.domain.repository import CommentRepository, PostRepository, UnitOfWork
from agora.domain.value import PostId

from .base import Service


def build_forest(
    rows: Iterable[CommentRow], post_id: PostId | None = None
) -> CommentForest:
    """Arrange preorder comment rows into a forest.

    Args:
        rows: Rows ordered by breadcrumb, each with its depth (path_length)
            below its top-level comment
        post_id: Post the rows belong to, used only for error reporting

    Returns:
        Forest whose roots are the top-level comments in row order

    Raises:
        NoCommentsForPostError: If there are no rows
        MalformedThreadError: If the rows are not a valid preorder traversal
    """
    forest = CommentForest()
    # stack[d] is the arena index of the node at depth d on the current path,
    # so len(stack) == current_depth + 1 after every row.
    stack: list[int] = []
    current_depth = 0

    for row in rows:
        if row.id in forest:
            raise MalformedThreadError(f"comment {row.id} appears more than once")

        depth = row.path_length
        index = forest.add(CommentNode.from_row(row))

        if depth == 0:
            current_depth = 0
            stack.clear()
            stack.append(index)
            forest.roots.append(index)
            continue

        if not stack:
            raise MalformedThreadError(
                f"comment {row.id} at depth {depth} has no top-level ancestor"
            )

        if depth == current_depth:
            # Sibling of the node just read
            stack.pop()
        elif depth == current_depth + 1:
            # First child of the node just read
            current_depth = depth
        elif depth < current_depth:
            # Back up past one or more finished subtrees
            del stack[depth:]
            current_depth = depth
        else:
            raise MalformedThreadError(
                f"comment {row.id} jumps from depth {current_depth} to {depth}"
            )

        forest.attach(stack[-1], index)
        stack.append(index)

    if not forest.roots:
        raise NoCommentsForPostError(post_id)

    return forest


class CommentTreeService(Service):
    """Domain service that reads a post's comments as a forest."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
    ) -> None:
        """Initialize comment tree service.

        Args:
            unit_of_work: Transaction boundary
            comment_repository: Comment repository
            post_repository: Post repository
        """
        self.unit_of_work = unit_of_work
        self.comment_repository = comment_repository
        self.post_repository = post_repository

    async def build_for_post(self, post_id: PostId) -> CommentForest:
        """Build the comment forest of a post.

        Args:
            post_id: Post ID

        Returns:
            Forest of the post's comments

        Raises:
            NotFoundError: If the post does not exist
            NoCommentsForPostError: If the post has no comments
        """
        with logfire.span("comment_tree_service.build_for_post", post_id=post_id):
            async with self.unit_of_work.transaction():
                post = await self.post_repository.find_by_id(post_id)
                if post is None:
                    logfire.warn("Thread requested for missing post", post_id=post_id)
                    raise NotFoundError("Post", str(post_id))

                top_level_ids = await self.comment_repository.find_top_level_ids(
                    post_id
                )
                if not top_level_ids:
                    logfire.info("Post has no comments", post_id=post_id)
                    raise NoCommentsForPostError(post_id)

                rows = await self.comment_repository.find_subtree_rows(top_level_ids)

            forest = build_forest(rows, post_id)
            logfire.info(
                "Comment forest built",
                post_id=post_id,
                top_level=len(forest.roots),
                count=len(forest),
            )
            return forest
