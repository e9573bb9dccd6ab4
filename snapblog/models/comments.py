"""
Comment model for snapblog.
"""
from django.conf import settings
from django.db import models

from ..conf import blog_settings


class Comment(models.Model):
    """
    Comment on a post.

    Comments are append-only: nothing edits or removes them except the
    cascade when their post is deleted.
    """

    post = models.ForeignKey(
        "snapblog.Post",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="snapblog_comments",
    )
    content = models.TextField(max_length=blog_settings.COMMENT_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["created_at", "pk"]
        indexes = [
            models.Index(fields=["post", "created_at"], name="snapblog_comment_post_created"),
        ]

    def __str__(self):
        return f"Comment by {self.author} on {self.post}"

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 100:
            return self.content[:100] + "..."
        return self.content
