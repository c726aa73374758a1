"""Forum service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

import structlog
from django.db import transaction

from modules.forum.exceptions import CommentNotFound, NotAuthor, PostNotFound
from modules.forum.models import Comment, ForumPost

if TYPE_CHECKING:
    from django.db import models

    from modules.accounts.models import User
    from modules.forum.dtos import CreateCommentDTO, CreatePostDTO, UpdatePostDTO
    from modules.forum.repositories.interfaces import IForumRepository

logger = structlog.get_logger(__name__)


class ForumService:
    def __init__(self, repository: IForumRepository) -> None:
        self._repo = repository

    def list_posts(self) -> models.QuerySet[ForumPost]:
        return self._repo.queryset()

    def get_post(self, id: Any) -> ForumPost:
        post = self._repo.get_by_id(id)
        if not post:
            raise PostNotFound()
        return post

    @transaction.atomic
    def create_post(self, author: User, dto: CreatePostDTO) -> ForumPost:
        post = self._repo.save(ForumPost(author=author, title=dto.title, content=dto.content))
        logger.info("forum.post_created", post_id=str(post.id), author_id=author.pk)
        return post

    @transaction.atomic
    def update_post(self, id: Any, actor: User, dto: UpdatePostDTO) -> ForumPost:
        post = self._authored(id, actor)
        if dto.title is not None:
            post.title = dto.title
        if dto.content is not None:
            post.content = dto.content
        return self._repo.save(post)

    @transaction.atomic
    def delete_post(self, id: Any, actor: User) -> None:
        post = self._authored(id, actor)
        self._repo.delete(post.id)
        logger.info("forum.post_deleted", post_id=str(post.id))

    @transaction.atomic
    def add_comment(self, id: Any, author: User, dto: CreateCommentDTO) -> Comment:
        post = self.get_post(id)
        comment = self._repo.add_comment(post, author, dto.content)
        self._refresh_comment_count(post)
        return comment

    @transaction.atomic
    def delete_comment(self, id: Any, comment_id: Any, actor: User) -> None:
        post = self.get_post(id)
        comment = self._repo.get_comment(post, comment_id)
        if not comment:
            raise CommentNotFound()
        if comment.author_id != actor.pk:
            raise NotAuthor()
        self._repo.delete_comment(comment)
        self._refresh_comment_count(post)

    @transaction.atomic
    def toggle_like(self, id: Any, user: User) -> List[Any]:
        post = self.get_post(id)
        return self._repo.toggle_like(post, user)

    def _authored(self, id: Any, actor: User) -> ForumPost:
        post = self.get_post(id)
        if post.author_id != actor.pk:
            logger.warning("forum.not_author", post_id=str(post.id), actor_id=actor.pk)
            raise NotAuthor()
        return post

    def _refresh_comment_count(self, post: ForumPost) -> None:
        post.comment_count = self._repo.count_comments(post)
        post.save(update_fields=["comment_count"])
