"""Forum DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.forum.models import Comment, ForumPost


class AuthorSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="pk", read_only=True)
    name = serializers.CharField(source="display_name", read_only=True)
    role = serializers.CharField(read_only=True)


class CommentSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "author", "content", "createdAt"]
        read_only_fields = fields


class ForumPostSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)
    likes = serializers.PrimaryKeyRelatedField(many=True, read_only=True)
    commentCount = serializers.IntegerField(source="comment_count", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = ForumPost
        fields = ["id", "title", "content", "author", "likes", "commentCount", "createdAt", "updatedAt"]
        read_only_fields = fields


class ForumPostDetailSerializer(ForumPostSerializer):
    comments = serializers.SerializerMethodField()

    class Meta(ForumPostSerializer.Meta):
        fields = ForumPostSerializer.Meta.fields + ["comments"]
        read_only_fields = fields

    def get_comments(self, obj: ForumPost) -> list:
        comments = obj.comments.select_related("author").order_by("-created_at")
        return CommentSerializer(comments, many=True).data


class PostWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    content = serializers.CharField()


class CommentWriteSerializer(serializers.Serializer):
    content = serializers.CharField()
