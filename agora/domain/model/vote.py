"""Vote ledger records.

Each user holds at most one signed score per target. Toggling between like
and dislike updates the record; it is never deleted by a vote operation.
"""

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import Score, Target, UserId


class VoteRecord(DomainModel):
    """A user's score on a post or comment."""

    user_id: UserId
    target: Target
    score: Score


class VoteOutcome(DomainModel):
    """Result of a Like or Dislike call.

    Attributes:
        previous: Score before the call (None when the user had not voted)
        score: Score after the call
        delta: Change applied to the target's like counter
    """

    user_id: UserId
    target: Target
    previous: Score | None = None
    score: Score
    delta: int = Field(ge=-2, le=2)

    @property
    def changed(self) -> bool:
        return self.delta != 0
