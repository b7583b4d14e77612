"""Post aggregate root.

Posts own the aggregate ``num_comments`` counter, which is changed in the
same transaction as every comment insert or delete.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import PostId, UserId


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    likes: int = 0
    num_comments: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
