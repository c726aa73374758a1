"""Forum API views (farmers only)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.permissions import IsFarmer
from modules.forum.dtos import CreateCommentDTO, CreatePostDTO, UpdatePostDTO
from modules.forum.repositories.django_repository import ForumDjangoRepository
from modules.forum.serializers import (
    CommentSerializer,
    CommentWriteSerializer,
    ForumPostDetailSerializer,
    ForumPostSerializer,
    PostWriteSerializer,
)
from modules.forum.services import ForumService


class ForumPostViewSet(GenericViewSet):
    permission_classes = [IsFarmer]
    serializer_class = ForumPostSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ForumService(repository=ForumDjangoRepository())

    def get_queryset(self):
        return self._service.list_posts()

    def list(self, request: Request) -> Response:
        """GET /api/v1/forum/"""
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(ForumPostSerializer(page, many=True).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/forum/"""
        serializer = PostWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        post = self._service.create_post(request.user, CreatePostDTO(**serializer.validated_data))
        return Response(ForumPostSerializer(post).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/forum/{pk}/"""
        return Response(ForumPostDetailSerializer(self._service.get_post(pk)).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/forum/{pk}/"""
        serializer = PostWriteSerializer(data=request.data, partial=request.method == "PATCH")
        serializer.is_valid(raise_exception=True)
        post = self._service.update_post(
            pk, request.user, UpdatePostDTO(**serializer.validated_data)
        )
        return Response(ForumPostSerializer(post).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/forum/{pk}/"""
        self._service.delete_post(pk, request.user)
        return Response({"message": "Post removed"})

    @action(detail=True, methods=["post"])
    def comments(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/forum/{pk}/comments/"""
        serializer = CommentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = self._service.add_comment(
            pk, request.user, CreateCommentDTO(**serializer.validated_data)
        )
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"comments/(?P<comment_id>[^/.]+)")
    def delete_comment(self, request: Request, pk: str | None = None, comment_id: str | None = None) -> Response:
        """DELETE /api/v1/forum/{pk}/comments/{comment_id}/"""
        self._service.delete_comment(pk, comment_id, request.user)
        return Response({"message": "Comment removed"})

    @action(detail=True, methods=["post"])
    def like(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/forum/{pk}/like/"""
        return Response({"likes": self._service.toggle_like(pk, request.user)})
