"""Translation of domain failures into GraphQL errors with machine-readable codes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

from graphql import GraphQLError
from pydantic import ValidationError

from inkwell.core.errors import (
    AlreadyVotedError,
    DuplicateVoteError,
    InkwellError,
    InvalidCredentialsError,
    InvalidDirectionError,
    NotFoundError,
    PermissionDeniedError,
    UsernameTakenError,
)

from .context import GraphQLContext

logger = logging.getLogger(__name__)

BAD_USER_INPUT: Final[str] = "BAD_USER_INPUT"
NOT_FOUND: Final[str] = "NOT_FOUND"
UNAUTHENTICATED: Final[str] = "UNAUTHENTICATED"
FORBIDDEN: Final[str] = "FORBIDDEN"
ALREADY_VOTED: Final[str] = "ALREADY_VOTED"
CONFLICT: Final[str] = "CONFLICT"
INTERNAL_SERVER_ERROR: Final[str] = "INTERNAL_SERVER_ERROR"

# Checked in order; the first matching class decides the code.
_ERROR_CODES: Final[tuple[tuple[type[InkwellError], str], ...]] = (
    (InvalidDirectionError, BAD_USER_INPUT),
    (NotFoundError, NOT_FOUND),
    (AlreadyVotedError, ALREADY_VOTED),
    (DuplicateVoteError, CONFLICT),
    (PermissionDeniedError, FORBIDDEN),
    (UsernameTakenError, BAD_USER_INPUT),
    (InvalidCredentialsError, BAD_USER_INPUT),
)


def graphql_error(message: str, code: str) -> GraphQLError:
    """Build a GraphQL error carrying ``code`` in its extensions."""
    return GraphQLError(message, extensions={"code": code})


def error_code(err: InkwellError) -> str:
    """Return the extension code reported for a domain error."""
    for error_type, code in _ERROR_CODES:
        if isinstance(err, error_type):
            return code
    return INTERNAL_SERVER_ERROR


def parse_id(raw: object, label: str) -> int:
    """Parse a GraphQL ID argument into a database identifier."""
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError) as err:
        raise graphql_error(f"Invalid {label} ID.", BAD_USER_INPUT) from err


def validation_message(err: ValidationError) -> str:
    """Condense a pydantic validation error into a single readable line."""
    parts = []
    for item in err.errors():
        location = ".".join(str(piece) for piece in item.get("loc", ()))
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


@contextmanager
def translate_errors(context: GraphQLContext, failure_message: str) -> Iterator[None]:
    """Roll back and re-raise failures from a resolver body as coded GraphQL errors.

    Args:
        context: Resolver context whose session is rolled back on failure.
        failure_message: Message reported for unexpected failures.
    """
    try:
        yield
    except GraphQLError:
        context.db.rollback()
        raise
    except ValidationError as err:
        context.db.rollback()
        raise graphql_error(validation_message(err), BAD_USER_INPUT) from err
    except InkwellError as err:
        context.db.rollback()
        raise graphql_error(str(err), error_code(err)) from err
    except Exception as err:
        context.db.rollback()
        logger.exception(failure_message)
        raise graphql_error(failure_message, INTERNAL_SERVER_ERROR) from err
