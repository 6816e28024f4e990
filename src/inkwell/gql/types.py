"""GraphQL object types mirroring the ORM models."""

from datetime import datetime
from typing import Optional

import strawberry
from strawberry.types import Info

from inkwell.models import Comment, Post, User
from inkwell.repositories import CommentRepository


@strawberry.type(name="User", description="A registered account.")
class UserType:
    id: strawberry.ID
    username: str
    created_at: datetime

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(id=strawberry.ID(str(user.id)), username=user.username, created_at=user.created_at)

    @strawberry.field(description="Posts written by the user.")
    def posts(self, info: Info) -> list["PostType"]:
        user = info.context.db.get(User, int(self.id))
        return [PostType.from_model(post) for post in user.posts] if user else []

    @strawberry.field(description="Comments written by the user.")
    def comments(self, info: Info) -> list["CommentType"]:
        user = info.context.db.get(User, int(self.id))
        return [CommentType.from_model(comment) for comment in user.comments] if user else []


@strawberry.type(name="Post", description="A blog post.")
class PostType:
    id: strawberry.ID
    title: str
    perex: str
    content: str
    author_id: strawberry.ID
    created_at: datetime

    @classmethod
    def from_model(cls, post: Post) -> "PostType":
        return cls(
            id=strawberry.ID(str(post.id)),
            title=post.title,
            perex=post.perex,
            content=post.content,
            author_id=strawberry.ID(str(post.author_id)),
            created_at=post.created_at,
        )

    @strawberry.field(description="The user who wrote the post.")
    def author(self, info: Info) -> UserType:
        return UserType.from_model(info.context.db.get(User, int(self.author_id)))

    @strawberry.field(description="Comments attached to the post.")
    def comments(self, info: Info) -> list["CommentType"]:
        repo = CommentRepository(info.context.db)
        return [CommentType.from_model(comment) for comment in repo.list_for_post(int(self.id))]


@strawberry.type(name="Comment", description="A comment on a post with its net vote score.")
class CommentType:
    id: strawberry.ID
    content: str
    created_at: datetime
    post_id: strawberry.ID
    author_id: strawberry.ID
    # Sum of upvotes (+1) and downvotes (-1).
    score: int

    @classmethod
    def from_model(cls, comment: Comment) -> "CommentType":
        return cls(
            id=strawberry.ID(str(comment.id)),
            content=comment.content,
            created_at=comment.created_at,
            post_id=strawberry.ID(str(comment.post_id)),
            author_id=strawberry.ID(str(comment.author_id)),
            score=comment.score,
        )

    @strawberry.field(description="The post the comment belongs to.")
    def post(self, info: Info) -> PostType:
        return PostType.from_model(info.context.db.get(Post, int(self.post_id)))

    @strawberry.field(description="The user who wrote the comment.")
    def author(self, info: Info) -> UserType:
        return UserType.from_model(info.context.db.get(User, int(self.author_id)))


@strawberry.type(description="Token issued on login together with the user it identifies.")
class AuthPayload:
    token: str
    user: UserType


@strawberry.input(description="Partial post update; omitted fields keep their value.")
class PostUpdateInput:
    title: Optional[str] = None
    perex: Optional[str] = None
    content: Optional[str] = None
