"""Strongly typed identifiers for community board entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType

UserId = NewType("UserId", int)
CategoryId = NewType("CategoryId", int)
PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)
TagId = NewType("TagId", int)
LikeId = NewType("LikeId", int)
