"""Read-only GraphQL fields."""

from typing import Optional

import strawberry
from strawberry.types import Info

from inkwell.services import comment_service, post_service, user_service

from .errors import BAD_USER_INPUT, NOT_FOUND, graphql_error, parse_id, translate_errors
from .types import CommentType, PostType, UserType


@strawberry.type
class Query:
    @strawberry.field(description="Every post.")
    def posts(self, info: Info) -> list[PostType]:
        with translate_errors(info.context, "Failed to fetch posts."):
            posts = post_service.list_posts(info.context.db)
            if not posts:
                raise graphql_error("No posts found.", NOT_FOUND)
            return [PostType.from_model(post) for post in posts]

    @strawberry.field(description="A single post by identifier.")
    def post(self, info: Info, id: strawberry.ID) -> Optional[PostType]:
        with translate_errors(info.context, "Failed to fetch post."):
            if not id:
                raise graphql_error("Please provide a post ID.", BAD_USER_INPUT)
            post = post_service.get_post(info.context.db, parse_id(id, "post"))
            if post is None:
                raise graphql_error("Post not found.", NOT_FOUND)
            return PostType.from_model(post)

    @strawberry.field(description="Every comment.")
    def comments(self, info: Info) -> Optional[list[CommentType]]:
        with translate_errors(info.context, "Failed to fetch comments."):
            comments = comment_service.list_comments(info.context.db)
            if not comments:
                raise graphql_error("No comments found.", NOT_FOUND)
            return [CommentType.from_model(comment) for comment in comments]

    @strawberry.field(description="A single comment by identifier.")
    def comment(self, info: Info, id: strawberry.ID) -> Optional[CommentType]:
        with translate_errors(info.context, "Failed to fetch comment."):
            if not id:
                raise graphql_error("Please provide a comment ID.", BAD_USER_INPUT)
            comment = comment_service.get_comment(info.context.db, parse_id(id, "comment"))
            if comment is None:
                raise graphql_error("Comment not found.", NOT_FOUND)
            return CommentType.from_model(comment)

    @strawberry.field(description="Every registered user.")
    def users(self, info: Info) -> Optional[list[UserType]]:
        with translate_errors(info.context, "Failed to fetch users."):
            users = user_service.get_users(info.context.db)
            if not users:
                raise graphql_error("No users found.", NOT_FOUND)
            return [UserType.from_model(user) for user in users]

    @strawberry.field(description="A single user by identifier.")
    def user(self, info: Info, id: strawberry.ID) -> Optional[UserType]:
        with translate_errors(info.context, "Failed to fetch user."):
            if not id:
                raise graphql_error("Please provide a user ID.", BAD_USER_INPUT)
            user = user_service.get_user(info.context.db, parse_id(id, "user"))
            if user is None:
                raise graphql_error("User not found.", NOT_FOUND)
            return UserType.from_model(user)
