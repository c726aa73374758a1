"""Forum domain exceptions."""

from modules.core.exceptions import Forbidden, NotFound


class PostNotFound(NotFound):
    code = "post_not_found"
    default_message = "Post not found."


class CommentNotFound(NotFound):
    code = "comment_not_found"
    default_message = "Comment not found."


class NotAuthor(Forbidden):
    default_message = "Only the author can change this."
