"""Account registration and login endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status

from inkwell.core.errors import InvalidCredentialsError, UsernameTakenError
from inkwell.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)
from inkwell.services import user_service

from ..dependencies import SessionDep

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register_user(payload: RegisterRequest, db: SessionDep) -> RegisterResponse:
    """Create a new account."""
    try:
        user = user_service.create_user(db, payload.username, payload.password)
        db.commit()
    except UsernameTakenError as err:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err

    return RegisterResponse(
        message="User registered successfully",
        user=UserSummary.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange a username and password for an access token."""
    try:
        _, token = user_service.login_user(db, payload.username, payload.password)
    except InvalidCredentialsError as err:
        logger.info("Failed login for %s", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        ) from err
    return LoginResponse(message="Login successful", token=token)
