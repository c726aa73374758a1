"""Forum repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.forum.models import Comment, ForumPost


class IForumRepository(IRepository["ForumPost"]):
    @abstractmethod
    def queryset(self) -> "models.QuerySet[ForumPost]": ...

    @abstractmethod
    def add_comment(self, post: "ForumPost", author: Any, content: str) -> "Comment": ...

    @abstractmethod
    def get_comment(self, post: "ForumPost", comment_id: Any) -> Optional["Comment"]: ...

    @abstractmethod
    def delete_comment(self, comment: "Comment") -> None: ...

    @abstractmethod
    def count_comments(self, post: "ForumPost") -> int: ...

    @abstractmethod
    def toggle_like(self, post: "ForumPost", user: Any) -> List[Any]:
        """Like or unlike; returns the ids of users who like the post."""
