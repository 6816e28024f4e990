"""Domain exceptions shared by repositories, services and API adapters."""


class InkwellError(RuntimeError):
    """Base class for all domain failures raised by the service layer."""


class NotFoundError(InkwellError):
    """Raised when a referenced entity does not exist."""


class PermissionDeniedError(InkwellError):
    """Raised when a user tries to modify content they do not own."""


class UsernameTakenError(InkwellError):
    """Raised when registering a username that already exists."""


class InvalidCredentialsError(InkwellError):
    """Raised when a username/password pair does not match an account."""


class VotingError(InkwellError):
    """Base class for comment voting failures.

    None of these are retried by the service; the caller decides.
    """


class InvalidDirectionError(VotingError):
    """Raised for a vote direction other than ``upvote`` or ``downvote``."""

    def __init__(self, direction: object) -> None:
        super().__init__(f'Invalid vote type {direction!r}. Must be "upvote" or "downvote".')
        self.direction = direction


class CommentNotFoundError(VotingError, NotFoundError):
    """Raised when voting on a comment that does not exist."""

    def __init__(self, comment_id: int) -> None:
        super().__init__(f"Comment {comment_id} not found")
        self.comment_id = comment_id


class AlreadyVotedError(VotingError):
    """Raised when a voter repeats the stance they already hold."""

    def __init__(self, voter_id: str, comment_id: int) -> None:
        super().__init__("You have already voted this way.")
        self.voter_id = voter_id
        self.comment_id = comment_id


class DuplicateVoteError(VotingError):
    """Raised when a concurrent request changed the same ledger row first.

    Unlike the other voting errors this one is a conflict: retrying the
    request re-reads the ledger and may succeed.
    """

    retryable = True
