"""Vote ledger: one recorded stance per (voter, comment)."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core.errors import DuplicateVoteError
from inkwell.models.vote import Vote

__all__ = ["VoteLedger"]

logger = logging.getLogger(__name__)


class VoteLedger:
    """Thin wrapper around database access for vote rows.

    The ledger never checks business rules; callers look up the current
    stance with :meth:`find_vote` before recording or revising it.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the ledger with a SQLAlchemy session."""
        self.session = session

    def find_vote(self, voter_id: str, comment_id: int) -> Vote | None:
        """Return the voter's stance on a comment, if any."""
        return self.session.execute(
            select(Vote).where(Vote.ip == voter_id, Vote.comment_id == comment_id)
        ).scalar_one_or_none()

    def record_vote(self, voter_id: str, comment_id: int, value: int) -> Vote:
        """Insert a new vote row.

        The insert runs in a savepoint so a unique-key violation leaves the
        surrounding transaction usable.

        Raises:
            DuplicateVoteError: If another request recorded a vote for the same
                voter and comment after the caller's lookup.
        """
        vote = Vote(ip=voter_id, comment_id=comment_id, value=value)
        try:
            with self.session.begin_nested():
                self.session.add(vote)
        except IntegrityError as err:
            logger.warning(
                "Concurrent first vote from %s on comment %d rejected", voter_id, comment_id
            )
            raise DuplicateVoteError(
                f"A vote from {voter_id} on comment {comment_id} was recorded concurrently"
            ) from err
        return vote

    def revise_vote(self, vote_id: int, new_value: int, *, expected_value: int) -> None:
        """Overwrite the value of an existing vote.

        The update only applies while the row still holds ``expected_value``;
        otherwise a concurrent revision won the race.

        Raises:
            DuplicateVoteError: If the row no longer holds ``expected_value``.
        """
        result = self.session.execute(
            update(Vote)
            .where(Vote.id == vote_id, Vote.value == expected_value)
            .values(value=new_value)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount != 1:
            logger.warning("Vote %d changed concurrently; revision to %d rejected", vote_id, new_value)
            raise DuplicateVoteError(f"Vote {vote_id} was revised concurrently")

    def votes_for(self, comment_id: int) -> list[Vote]:
        """Return every vote recorded on a comment, oldest first."""
        result = self.session.execute(
            select(Vote).where(Vote.comment_id == comment_id).order_by(Vote.id)
        )
        return list(result.scalars())
