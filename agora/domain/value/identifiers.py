"""Strongly typed identifiers for forum entities.

Identifiers are integers assigned by the store. NewType keeps post,
comment and user ids from being mixed up at call sites.
"""

from typing import NewType

UserId = NewType("UserId", int)
PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)
