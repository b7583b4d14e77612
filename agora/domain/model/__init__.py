"""Domain model entities for the forum."""

from agora.domain.model.comment import ClosureEdge, Comment
from agora.domain.model.post import Post
from agora.domain.model.save import SaveRecord
from agora.domain.model.thread import (
    CommentForest,
    CommentNode,
    CommentRow,
)
from agora.domain.model.vote import VoteOutcome, VoteRecord

__all__ = [
    "Post",
    "Comment",
    "ClosureEdge",
    "CommentRow",
    "CommentNode",
    "CommentForest",
    "VoteRecord",
    "VoteOutcome",
    "SaveRecord",
]
