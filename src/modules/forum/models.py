"""Farmer discussion board.

``comment_count`` is stored on the post and refreshed by the service
after each comment is added or removed.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel


class ForumPost(BaseModel):
    title = models.CharField(max_length=255)
    content = models.TextField()
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="forum_posts",
    )
    likes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="liked_posts",
        blank=True,
    )
    comment_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "forum_posts"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title


class Comment(BaseModel):
    post = models.ForeignKey(ForumPost, on_delete=models.CASCADE, related_name="comments")
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="forum_comments",
    )
    content = models.TextField()

    class Meta:
        db_table = "forum_comments"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Comment by {self.author_id} on {self.post_id}"
