"""Comment entity and closure edges.

Comments are threaded with unlimited depth. The thread structure is kept in
a closure table: one ClosureEdge per (ancestor, descendant) pair, including
a zero-length self-edge for every comment.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    ``likes`` is a denormalized counter fed by the vote ledger; it can be
    negative when dislikes outnumber likes.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1, max_length=10000)
    likes: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class ClosureEdge(DomainModel):
    """One row of the comment closure table.

    A comment at depth d is the descendant of exactly d+1 edges: one per
    ancestor plus its self-edge (path_length 0).
    """

    ancestor: CommentId
    descendant: CommentId
    path_length: int = Field(ge=0)
