"""Signup and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebookshare.api.deps import get_app_settings
from ebookshare.core.config import Settings
from ebookshare.core.database import get_db
from ebookshare.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    UserPublic,
)
from ebookshare.services import accounts

router = APIRouter()


@router.post("/signup", response_model=MessageResponse)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """
    Create a new user. Enter the password twice to confirm.
    Log in separately to obtain a token.
    """
    accounts.signup(db, body, settings)
    return MessageResponse(message="User was registered successfully!")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT and the public profile.
    Include the token in the Authorization header as: Bearer <token>
    """
    token, user = accounts.login(db, body.username, body.password, settings)
    return LoginResponse(token=token, user=UserPublic.from_model(user))
