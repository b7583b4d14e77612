"""Domain value objects for the forum."""

from agora.domain.value.identifiers import CommentId, PostId, UserId
from agora.domain.value.types import Score, Target, TargetKind

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Types
    "Score",
    "Target",
    "TargetKind",
]
