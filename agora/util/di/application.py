"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentThreadUseCase,
    UpdateCommentUseCase,
)
from agora.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
)
from agora.application.usecase.save import (
    ListSavedUseCase,
    SaveUseCase,
    UnsaveUseCase,
)
from agora.application.usecase.vote import (
    DislikeUseCase,
    LikeUseCase,
    ListLikedUseCase,
)
from agora.domain.service import (
    CommentService,
    CommentTreeService,
    PostService,
    SaveService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_thread_use_case(
        self, comment_tree_service: CommentTreeService, vote_service: VoteService
    ) -> GetCommentThreadUseCase:
        """Provide get comment thread use case."""
        return GetCommentThreadUseCase(
            comment_tree_service=comment_tree_service, vote_service=vote_service
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_like_use_case(self, vote_service: VoteService) -> LikeUseCase:
        """Provide like use case."""
        return LikeUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_dislike_use_case(self, vote_service: VoteService) -> DislikeUseCase:
        """Provide dislike use case."""
        return DislikeUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_list_liked_use_case(self, vote_service: VoteService) -> ListLikedUseCase:
        """Provide list liked use case."""
        return ListLikedUseCase(vote_service=vote_service)

    # Save use cases
    @provide(scope=Scope.REQUEST)
    def get_save_use_case(self, save_service: SaveService) -> SaveUseCase:
        """Provide save use case."""
        return SaveUseCase(save_service=save_service)

    @provide(scope=Scope.REQUEST)
    def get_unsave_use_case(self, save_service: SaveService) -> UnsaveUseCase:
        """Provide unsave use case."""
        return UnsaveUseCase(save_service=save_service)

    @provide(scope=Scope.REQUEST)
    def get_list_saved_use_case(self, save_service: SaveService) -> ListSavedUseCase:
        """Provide list saved use case."""
        return ListSavedUseCase(save_service=save_service)
