"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    SaveRepository,
    UnitOfWork,
    VoteRepository,
)
from agora.domain.service import (
    CommentService,
    CommentTreeService,
    PostService,
    SaveService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the unit of work and
    repository lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_post_service(
        self,
        unit_of_work: UnitOfWork,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        save_repository: SaveRepository,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            unit_of_work=unit_of_work,
            post_repository=post_repository,
            vote_repository=vote_repository,
            comment_repository=comment_repository,
            save_repository=save_repository,
        )

    @provide
    def get_comment_service(
        self,
        unit_of_work: UnitOfWork,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        save_repository: SaveRepository,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            unit_of_work=unit_of_work,
            comment_repository=comment_repository,
            post_repository=post_repository,
            vote_repository=vote_repository,
            save_repository=save_repository,
        )

    @provide
    def get_comment_tree_service(
        self,
        unit_of_work: UnitOfWork,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
    ) -> CommentTreeService:
        """Provide comment thread domain service."""
        return CommentTreeService(
            unit_of_work=unit_of_work,
            comment_repository=comment_repository,
            post_repository=post_repository,
        )

    @provide
    def get_vote_service(
        self,
        unit_of_work: UnitOfWork,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            unit_of_work=unit_of_work,
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_save_service(
        self,
        unit_of_work: UnitOfWork,
        save_repository: SaveRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> SaveService:
        """Provide save domain service."""
        return SaveService(
            unit_of_work=unit_of_work,
            save_repository=save_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
        )
