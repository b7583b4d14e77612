"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum

from pydantic import Field

from agora.domain.value.common import ValueObject


class TargetKind(str, Enum):
    """Type of entity that can be voted on or saved."""

    POST = "post"
    COMMENT = "comment"


class Score(IntEnum):
    """A user's signed opinion on a target.

    There is no neutral score: a missing vote record means no vote.
    """

    LIKE = 1
    DISLIKE = -1


class Target(ValueObject):
    """A votable / saveable entity."""

    kind: TargetKind
    id: int = Field(ge=1)

    @classmethod
    def post(cls, post_id: int) -> "Target":
        return cls(kind=TargetKind.POST, id=post_id)

    @classmethod
    def comment(cls, comment_id: int) -> "Target":
        return cls(kind=TargetKind.COMMENT, id=comment_id)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"
