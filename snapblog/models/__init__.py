"""
Models for snapblog.

All models are importable from snapblog.models:

    from snapblog.models import Post, Like, Comment
"""
from .posts import Post, Like
from .comments import Comment

__all__ = [
    "Post",
    "Like",
    "Comment",
]
