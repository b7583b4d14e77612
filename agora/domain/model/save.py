"""Saved (bookmarked) posts and comments."""

from agora.domain.model.common import DomainModel
from agora.domain.value import Target, UserId


class SaveRecord(DomainModel):
    """Presence of a record means the target is saved by the user."""

    user_id: UserId
    target: Target
