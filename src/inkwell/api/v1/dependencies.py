"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inkwell.core.security import JWTError, decode_access_token
from inkwell.core.settings import settings
from inkwell.db.session import get_db
from inkwell.models import User

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        user_id = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_voter_ip(request: Request) -> str:
    """Return the client address used as the anonymous voter identity."""
    if request.client and request.client.host:
        return request.client.host
    return settings.vote_fallback_ip


def parse_id(raw: object, label: str) -> int:
    """Parse a path or body identifier, answering 400 when it is not an integer."""
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError) as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} ID",
        ) from err


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
VoterIpDep = Annotated[str, Depends(get_voter_ip)]
