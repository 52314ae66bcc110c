# board/models/__init__.py
from .post import Post, PostPayload
from .comment import Comment, CommentPayload

__all__ = ['Post', 'PostPayload', 'Comment', 'CommentPayload']
