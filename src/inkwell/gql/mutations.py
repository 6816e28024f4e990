"""GraphQL mutations.

Every resolver commits its own unit of work and, where the schema promises it,
publishes the resulting comment to subscribers after the commit.
"""

from typing import Annotated

import strawberry
from strawberry.types import Info

from inkwell.models import User
from inkwell.schemas.comment import CommentCreate, CommentUpdate
from inkwell.schemas.post import PostCreate, PostUpdate
from inkwell.schemas.user import LoginRequest, RegisterRequest
from inkwell.services import comment_service, post_service, user_service
from inkwell.services.events import COMMENT_ADDED, COMMENT_DELETED, COMMENT_UPDATED, VOTE_UPDATED
from inkwell.services.voting import VOTE_DIRECTIONS, get_vote_service

from .context import GraphQLContext
from .errors import BAD_USER_INPUT, UNAUTHENTICATED, graphql_error, parse_id, translate_errors
from .types import AuthPayload, CommentType, PostType, PostUpdateInput, UserType


def _require_user(context: GraphQLContext, action: str) -> User:
    user = context.user
    if user is None:
        raise graphql_error(f"You must be logged in to {action}.", UNAUTHENTICATED)
    return user


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Register a new account.")
    def create_user(self, info: Info, username: str, password: str) -> UserType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to register."):
            if not username or not password:
                raise graphql_error("Username and password are required fields.", BAD_USER_INPUT)
            payload = RegisterRequest(username=username, password=password)
            user = user_service.create_user(ctx.db, payload.username, payload.password)
            ctx.db.commit()
            return UserType.from_model(user)

    @strawberry.mutation(description="Authenticate and receive a JWT.")
    def login_user(self, info: Info, username: str, password: str) -> AuthPayload:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to log in."):
            if not username or not password:
                raise graphql_error("Username and password are required fields.", BAD_USER_INPUT)
            payload = LoginRequest(username=username, password=password)
            user, token = user_service.login_user(ctx.db, payload.username, payload.password)
            return AuthPayload(token=token, user=UserType.from_model(user))

    @strawberry.mutation(description="Publish a new post.")
    def create_post(self, info: Info, title: str, perex: str, content: str) -> PostType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to create a new post."):
            user = _require_user(ctx, "create a post")
            payload = PostCreate(title=title, perex=perex, content=content)
            post = post_service.create_post(
                ctx.db, user, title=payload.title, perex=payload.perex, content=payload.content
            )
            ctx.db.commit()
            return PostType.from_model(post)

    @strawberry.mutation(description="Edit a post you wrote.")
    def update_post(self, info: Info, post_id: strawberry.ID, data: PostUpdateInput) -> PostType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to update post."):
            user = _require_user(ctx, "update a post")
            post = post_service.get_owned_post(ctx.db, parse_id(post_id, "post"), user)
            changes = PostUpdate(title=data.title, perex=data.perex, content=data.content)
            post_service.update_post(
                ctx.db, post, title=changes.title, perex=changes.perex, content=changes.content
            )
            ctx.db.commit()
            return PostType.from_model(post)

    @strawberry.mutation(description="Delete a post you wrote, together with its comments.")
    def delete_post(self, info: Info, post_id: strawberry.ID) -> PostType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to delete post."):
            user = _require_user(ctx, "delete a post")
            post = post_service.get_owned_post(ctx.db, parse_id(post_id, "post"), user)
            deleted = PostType.from_model(post)
            post_service.delete_post(ctx.db, post)
            ctx.db.commit()
            return deleted

    @strawberry.mutation(description="Comment on a post.")
    def create_comment(self, info: Info, post_id: strawberry.ID, content: str) -> CommentType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to create comment."):
            user = _require_user(ctx, "post a comment")
            if not post_id or not content:
                raise graphql_error("Post ID and content are required fields.", BAD_USER_INPUT)
            payload = CommentCreate(post_id=parse_id(post_id, "post"), content=content)
            comment = comment_service.create_comment(
                ctx.db, user, post_id=int(payload.post_id), content=payload.content
            )
            ctx.db.commit()
            result = CommentType.from_model(comment)
        ctx.broker.publish(COMMENT_ADDED, result)
        return result

    @strawberry.mutation(description="Edit a comment you wrote.")
    def update_comment(self, info: Info, comment_id: strawberry.ID, content: str) -> CommentType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to update comment."):
            user = _require_user(ctx, "update a comment")
            comment = comment_service.get_owned_comment(
                ctx.db, parse_id(comment_id, "comment"), user
            )
            if not content:
                raise graphql_error("Content is required when updating a comment.", BAD_USER_INPUT)
            payload = CommentUpdate(content=content)
            comment_service.update_comment(ctx.db, comment, payload.content)
            ctx.db.commit()
            result = CommentType.from_model(comment)
        ctx.broker.publish(COMMENT_UPDATED, result)
        return result

    @strawberry.mutation(description="Delete a comment you wrote.")
    def delete_comment(self, info: Info, comment_id: strawberry.ID) -> CommentType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to delete comment."):
            user = _require_user(ctx, "delete a comment")
            comment = comment_service.get_owned_comment(
                ctx.db, parse_id(comment_id, "comment"), user
            )
            result = CommentType.from_model(comment)
            comment_service.delete_comment(ctx.db, comment)
            ctx.db.commit()
        ctx.broker.publish(COMMENT_DELETED, result)
        return result

    @strawberry.mutation(description="Upvote or downvote a comment as the calling IP address.")
    def vote_comment(
        self,
        info: Info,
        comment_id: strawberry.ID,
        vote_type: Annotated[str, strawberry.argument(name="type")],
    ) -> CommentType:
        ctx: GraphQLContext = info.context
        with translate_errors(ctx, "Failed to vote on a comment."):
            if not comment_id or not vote_type:
                raise graphql_error("Comment ID and type are required.", BAD_USER_INPUT)
            parsed_id = parse_id(comment_id, "comment")
            if vote_type not in VOTE_DIRECTIONS:
                raise graphql_error(
                    'Invalid vote type. Must be "upvote" or "downvote".', BAD_USER_INPUT
                )
            outcome = get_vote_service(ctx.db).apply_vote(parsed_id, vote_type, ctx.client_ip)
            ctx.db.commit()
            result = CommentType.from_model(outcome.comment)
        # Only a flipped vote is announced; first votes are silent.
        if outcome.flipped:
            ctx.broker.publish(VOTE_UPDATED, result)
        return result
