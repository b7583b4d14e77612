"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentTreeService, build_forest
from .post_service import PostService
from .save_service import SaveService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "CommentTreeService",
    "PostService",
    "SaveService",
    "Service",
    "VoteService",
    "build_forest",
]
