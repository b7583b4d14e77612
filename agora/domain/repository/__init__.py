"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from agora.domain.repository.comment import CommentRepository
from agora.domain.repository.counter import LikeCounterRepository
from agora.domain.repository.post import PostRepository
from agora.domain.repository.save import SaveRepository
from agora.domain.repository.unit_of_work import UnitOfWork
from agora.domain.repository.vote import VoteRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
    "LikeCounterRepository",
    "VoteRepository",
    "SaveRepository",
    "UnitOfWork",
]
