"""Get comment thread use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.error import NoCommentsForPostError
from agora.domain.model.thread import CommentForest, CommentNode
from agora.domain.service import CommentTreeService, VoteService
from agora.domain.value import PostId, Score, TargetKind, UserId


class CommentItem(BaseModel):
    """Comment node in the response tree."""

    comment_id: int
    author_id: int
    author_name: str
    content: str
    likes: int
    depth: int
    created_at: datetime
    updated_at: datetime
    viewer_score: Optional[Score] = None
    children: list["CommentItem"] = Field(default_factory=list)


class GetCommentThreadRequest(BaseModel):
    """Get comment thread request."""

    post_id: int
    viewer_id: Optional[int] = None  # Signed-in user, if any


class GetCommentThreadResponse(BaseModel):
    """Get comment thread response.

    ``no_comments`` is set when the post exists but nobody has commented
    yet; ``comments`` is then empty.
    """

    post_id: int
    comments: list[CommentItem]
    total: int
    no_comments: bool = False


class GetCommentThreadUseCase(BaseUseCase):
    """Use case for reading a post's comments as nested threads."""

    def __init__(
        self, comment_tree_service: CommentTreeService, vote_service: VoteService
    ) -> None:
        """Initialize get comment thread use case.

        Args:
            comment_tree_service: Builds the comment forest
            vote_service: Vote service for the viewer's scores
        """
        self.comment_tree_service = comment_tree_service
        self.vote_service = vote_service

    async def execute(
        self, request: GetCommentThreadRequest
    ) -> GetCommentThreadResponse:
        """Execute get comment thread flow.

        Args:
            request: Post ID and optional viewer ID

        Returns:
            Top-level comments in thread order, replies nested below them

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(request.post_id)

        try:
            forest = await self.comment_tree_service.build_for_post(post_id)
        except NoCommentsForPostError:
            return GetCommentThreadResponse(
                post_id=request.post_id, comments=[], total=0, no_comments=True
            )

        # Batch query for the viewer's votes on every comment in the thread
        scores: dict[int, Score] = {}
        if request.viewer_id is not None:
            scores = await self.vote_service.scores_for(
                UserId(request.viewer_id),
                TargetKind.COMMENT,
                [node.id for node in forest.walk()],
            )

        return GetCommentThreadResponse(
            post_id=request.post_id,
            comments=[
                _to_item(forest, node, scores) for node in forest.root_nodes()
            ],
            total=len(forest),
        )


def _to_item(
    forest: CommentForest, node: CommentNode, scores: dict[int, Score]
) -> CommentItem:
    return CommentItem(
        comment_id=node.id,
        author_id=node.author_id,
        author_name=node.author_name,
        content=node.content,
        likes=node.likes,
        depth=node.depth,
        created_at=node.created_at,
        updated_at=node.updated_at,
        viewer_score=scores.get(node.id),
        children=[_to_item(forest, child, scores) for child in forest.children_of(node)],
    )
