"""Comment and comment-vote endpoints for the Inkwell API."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inkwell.core.errors import (
    AlreadyVotedError,
    CommentNotFoundError,
    DuplicateVoteError,
    InvalidDirectionError,
    NotFoundError,
    PermissionDeniedError,
    VotingError,
)
from inkwell.models import Comment, User
from inkwell.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from inkwell.schemas.vote import VoteRequest
from inkwell.services import comment_service
from inkwell.services.voting import VOTE_DIRECTIONS, get_vote_service

from ..dependencies import (
    CurrentUserDep,
    SessionDep,
    VoterIpDep,
    get_current_user,
    parse_id,
)

router = APIRouter(prefix="/comments", tags=["comments"])
logger = logging.getLogger(__name__)

_VOTE_ERROR_STATUS: dict[type[VotingError], int] = {
    InvalidDirectionError: status.HTTP_400_BAD_REQUEST,
    CommentNotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyVotedError: status.HTTP_409_CONFLICT,
    DuplicateVoteError: status.HTTP_409_CONFLICT,
}


def _owned_comment_or_error(db: Session, comment_id: int, current_user: User) -> Comment:
    try:
        return comment_service.get_owned_comment(db, comment_id, current_user)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except PermissionDeniedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err


@router.get("/", response_model=list[CommentResponse])
async def list_comments(db: SessionDep) -> list[Comment]:
    """List every comment."""
    return comment_service.list_comments(db)


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: str, db: SessionDep) -> Comment:
    """Fetch a single comment."""
    comment = comment_service.get_comment(db, parse_id(comment_id, "comment"))
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment


@router.post("/", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    """Comment on an existing post as the current user."""
    post_id = parse_id(payload.post_id, "post")
    try:
        comment = comment_service.create_comment(
            db, current_user, post_id=post_id, content=payload.content
        )
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    db.commit()
    db.refresh(comment)
    return comment


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    """Edit the content of a comment owned by the current user."""
    comment = _owned_comment_or_error(db, parse_id(comment_id, "comment"), current_user)
    comment_service.update_comment(db, comment, payload.content)
    db.commit()
    db.refresh(comment)
    return comment


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Delete a comment owned by the current user."""
    comment = _owned_comment_or_error(db, parse_id(comment_id, "comment"), current_user)
    comment_service.delete_comment(db, comment)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{comment_id}/vote",
    response_model=CommentResponse,
    dependencies=[Depends(get_current_user)],
)
async def vote_on_comment(
    comment_id: str,
    payload: VoteRequest,
    voter_ip: VoterIpDep,
    db: SessionDep,
) -> Comment:
    """Upvote or downvote a comment on behalf of the caller's IP address."""
    parsed_id = parse_id(comment_id, "comment")
    if not isinstance(payload.type, str) or payload.type not in VOTE_DIRECTIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Invalid vote type. Must be "upvote" or "downvote".',
        )

    try:
        outcome = get_vote_service(db).apply_vote(parsed_id, payload.type, voter_ip)
        db.commit()
    except VotingError as err:
        db.rollback()
        raise HTTPException(
            status_code=_VOTE_ERROR_STATUS.get(type(err), status.HTTP_500_INTERNAL_SERVER_ERROR),
            detail=str(err),
        ) from err
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Failed to vote on comment %d", parsed_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to vote on comment",
        ) from err

    db.refresh(outcome.comment)
    return outcome.comment
