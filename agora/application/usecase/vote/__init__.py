"""Vote use cases."""

from .dislike import DislikeRequest, DislikeUseCase
from .like import LikeRequest, LikeUseCase, VoteResponse
from .list_liked import ListLikedRequest, ListLikedUseCase

__all__ = [
    "LikeRequest",
    "LikeUseCase",
    "DislikeRequest",
    "DislikeUseCase",
    "ListLikedRequest",
    "ListLikedUseCase",
    "VoteResponse",
]
