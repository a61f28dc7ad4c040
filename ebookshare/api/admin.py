"""Admin-only endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebookshare.api.deps import require_admin
from ebookshare.core.database import get_db
from ebookshare.models import User
from ebookshare.schemas.auth import UserPublic
from ebookshare.schemas.ebook import NO_MATCHES_MESSAGE
from ebookshare.schemas.user import UsersListResponse
from ebookshare.services import accounts

router = APIRouter()


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only). Passwords are never included."""
    users = accounts.list_users(db)
    if not users:
        return UsersListResponse(users=NO_MATCHES_MESSAGE)
    return UsersListResponse(users=[UserPublic.from_model(u) for u in users])
