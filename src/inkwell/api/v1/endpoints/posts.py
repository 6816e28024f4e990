"""Post-related endpoints for the Inkwell API."""

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.orm import Session

from inkwell.core.errors import NotFoundError, PermissionDeniedError
from inkwell.models import Post, User
from inkwell.schemas.post import PostCreate, PostResponse, PostUpdate, PostWithComments
from inkwell.services import post_service

from ..dependencies import CurrentUserDep, SessionDep, parse_id

router = APIRouter(prefix="/posts", tags=["posts"])


def _owned_post_or_error(db: Session, post_id: int, current_user: User) -> Post:
    try:
        return post_service.get_owned_post(db, post_id, current_user)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except PermissionDeniedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err


@router.get("/", response_model=list[PostWithComments])
async def list_posts(db: SessionDep) -> list[Post]:
    """List every post with its comments."""
    return list(post_service.list_posts(db))


@router.get("/{post_id}", response_model=PostWithComments)
async def get_post(post_id: str, db: SessionDep) -> Post:
    """Fetch a single post with its comments."""
    post = post_service.get_post(db, parse_id(post_id, "post"))
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, current_user: CurrentUserDep, db: SessionDep) -> Post:
    """Publish a new post as the current user."""
    post = post_service.create_post(
        db,
        current_user,
        title=payload.title,
        perex=payload.perex,
        content=payload.content,
    )
    db.commit()
    db.refresh(post)
    return post


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Edit a post owned by the current user."""
    post = _owned_post_or_error(db, parse_id(post_id, "post"), current_user)
    post_service.update_post(
        db,
        post,
        title=payload.title,
        perex=payload.perex,
        content=payload.content,
    )
    db.commit()
    db.refresh(post)
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: str, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Delete a post owned by the current user, along with its comments."""
    post = _owned_post_or_error(db, parse_id(post_id, "post"), current_user)
    post_service.delete_post(db, post)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
