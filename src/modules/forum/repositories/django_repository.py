"""Django ORM implementation of the Forum repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.forum.models import Comment, ForumPost
from modules.forum.repositories.interfaces import IForumRepository

logger = structlog.get_logger(__name__)


class ForumDjangoRepository(IForumRepository):
    def queryset(self):
        return ForumPost.objects.select_related("author").prefetch_related("likes")

    def get_by_id(self, id: str) -> Optional[ForumPost]:
        try:
            return self.queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[ForumPost]:
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: ForumPost) -> ForumPost:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = ForumPost.objects.filter(id=id).delete()
        return deleted > 0

    def add_comment(self, post: ForumPost, author: Any, content: str) -> Comment:
        return Comment.objects.create(post=post, author=author, content=content)

    def get_comment(self, post: ForumPost, comment_id: Any) -> Optional[Comment]:
        try:
            return Comment.objects.filter(post=post, id=comment_id).first()
        except (ValueError, ValidationError):
            return None

    def delete_comment(self, comment: Comment) -> None:
        comment.delete()

    def count_comments(self, post: ForumPost) -> int:
        return Comment.objects.filter(post=post).count()

    def toggle_like(self, post: ForumPost, user: Any) -> List[Any]:
        if post.likes.filter(pk=user.pk).exists():
            post.likes.remove(user)
        else:
            post.likes.add(user)
        return list(post.likes.values_list("pk", flat=True))
