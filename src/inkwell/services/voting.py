"""Comment voting: reconciles the vote ledger with each comment's cached score.

A comment's ``score`` always equals the sum of the ``value`` of its vote rows.
The invariant is maintained incrementally: every ledger change is followed by
an atomic increment of the score by exactly the change in that voter's value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from sqlalchemy.orm import Session

from inkwell.core.errors import (
    AlreadyVotedError,
    CommentNotFoundError,
    InvalidDirectionError,
)
from inkwell.models import VOTE_DOWN, VOTE_UP, Comment
from inkwell.repositories import CommentRepository, VoteLedger

__all__ = ["VOTE_DIRECTIONS", "VoteOutcome", "VoteService", "get_vote_service", "vote_value"]

logger = logging.getLogger(__name__)

VOTE_DIRECTIONS: Final[dict[str, int]] = {"upvote": VOTE_UP, "downvote": VOTE_DOWN}


def vote_value(direction: object) -> int:
    """Map a direction name to its signed magnitude.

    Raises:
        InvalidDirectionError: If ``direction`` is not ``upvote`` or ``downvote``.
    """
    if not isinstance(direction, str) or direction not in VOTE_DIRECTIONS:
        raise InvalidDirectionError(direction)
    return VOTE_DIRECTIONS[direction]


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a successful vote."""

    comment: Comment
    # True when an existing opposite vote was flipped rather than a first vote recorded.
    flipped: bool


class VoteService:
    """Apply up/down votes to comments on behalf of anonymous voters."""

    def __init__(self, ledger: VoteLedger, comments: CommentRepository) -> None:
        self._ledger = ledger
        self._comments = comments

    def apply_vote(self, comment_id: int, direction: str, voter_id: str) -> VoteOutcome:
        """Record ``voter_id``'s stance on a comment and update its score.

        Args:
            comment_id: Identifier of the comment being voted on.
            direction: ``"upvote"`` or ``"downvote"``.
            voter_id: Voter identity (client IP address).

        Returns:
            The refreshed comment and whether an existing vote was flipped.

        Raises:
            InvalidDirectionError: Unknown direction; nothing is looked up.
            CommentNotFoundError: The comment does not exist; no vote is written.
            AlreadyVotedError: The voter already holds this stance; nothing changes.
            DuplicateVoteError: A concurrent request changed the same ledger row.
        """
        value = vote_value(direction)

        if self._comments.get_by_id(comment_id) is None:
            raise CommentNotFoundError(comment_id)

        existing = self._ledger.find_vote(voter_id, comment_id)
        if existing is None:
            self._ledger.record_vote(voter_id, comment_id, value)
            comment = self._increment(comment_id, value)
            logger.debug("Recorded %s from %s on comment %d", direction, voter_id, comment_id)
            return VoteOutcome(comment=comment, flipped=False)

        previous = existing.value
        if previous == value:
            raise AlreadyVotedError(voter_id, comment_id)

        self._ledger.revise_vote(existing.id, value, expected_value=previous)
        # Delta, not assignment: the voter's old contribution is replaced by the new one.
        comment = self._increment(comment_id, value - previous)
        logger.debug("Flipped vote from %s on comment %d to %s", voter_id, comment_id, direction)
        return VoteOutcome(comment=comment, flipped=True)

    def _increment(self, comment_id: int, delta: int) -> Comment:
        comment = self._comments.increment_score(comment_id, delta)
        if comment is None:
            # The comment vanished between the existence check and the increment.
            raise CommentNotFoundError(comment_id)
        return comment


def get_vote_service(db: Session) -> VoteService:
    """Build a vote service bound to ``db``."""
    return VoteService(VoteLedger(db), CommentRepository(db))
