"""Domain layer errors."""

from enum import Enum


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class MalformedThreadError(ValidationError):
    """Raised when flat comment rows cannot be arranged into a forest."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to edit content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to edit {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NoCommentsForPostError(DomainError):
    """Raised when a post exists but has no comments.

    Kept apart from NotFoundError so callers can render an empty thread
    instead of a missing page.
    """

    def __init__(self, post_id: object = None):
        self.post_id = post_id
        super().__init__(f"no comments found for post: {post_id}")


# ============================================================================
# Store errors
# ============================================================================


class StoreError(DomainError):
    """Base error for failures reported by the relational store."""

    pass


class ConstraintViolationError(StoreError):
    """A statement violated a store constraint (e.g. a duplicate insert)."""

    pass


class TransactionFailureError(StoreError):
    """Begin, commit or rollback failed."""

    pass


class StoreTimeoutError(StoreError):
    """The operation deadline expired before the store answered."""

    pass


class UnknownStoreError(StoreError):
    """Unclassified store failure."""

    pass


class InsertStep(str, Enum):
    """Steps of the comment insert transaction."""

    COMMENT = "comment"
    CLOSURE_EDGES = "closure_edges"
    SELF_LIKE = "self_like"
    COMMENT_COUNT = "comment_count"


class CommentInsertError(StoreError):
    """A step of the comment insert transaction failed.

    Attributes:
        step: The failing step
        cause: The store error raised by that step
    """

    step: InsertStep

    def __init__(self, cause: StoreError):
        self.cause = cause
        super().__init__(f"failed to insert comment ({self.step.value}): {cause}")


class CommentRowInsertError(CommentInsertError):
    """Failed to insert the comment row."""

    step = InsertStep.COMMENT


class ClosureEdgeInsertError(CommentInsertError):
    """Failed to insert the comment's closure edges."""

    step = InsertStep.CLOSURE_EDGES


class SelfLikeInsertError(CommentInsertError):
    """Failed to record the author's like on their own comment."""

    step = InsertStep.SELF_LIKE


class CommentCountUpdateError(CommentInsertError):
    """Failed to increment the number of comments on the post."""

    step = InsertStep.COMMENT_COUNT
