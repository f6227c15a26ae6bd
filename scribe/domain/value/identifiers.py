"""Strongly typed identifiers for NovaScribe domain entities.

Identifiers are opaque strings. Using NewType keeps post and comment ids
from being mixed up at call sites.
"""

from typing import NewType

PostId = NewType("PostId", str)
CommentId = NewType("CommentId", str)
AdminUserId = NewType("AdminUserId", str)
