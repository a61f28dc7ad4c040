"""Auth dependencies: bearer token extraction/verification and admin role check."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ebookshare.core.config import Settings
from ebookshare.core.database import get_db
from ebookshare.core.errors import Forbidden, MissingToken
from ebookshare.core.security import verify_access_token
from ebookshare.models import User
from ebookshare.schemas.auth import Identity

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency: the Settings instance the app was built with."""
    return request.app.state.settings


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Identity:
    """
    Dependency: require a valid Bearer JWT and return the caller's identity.

    Raises MissingToken (403) without a bearer header and InvalidToken (401)
    when verification fails. Does not touch the database.
    """
    if credentials is None or not credentials.credentials:
        raise MissingToken("No token provided!")
    user_id = verify_access_token(credentials.credentials, settings)
    return Identity(id=user_id)


def require_admin(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: load the caller and require the 'admin' role. Raises 403 otherwise."""
    user = db.get(User, identity.id)
    if user is None or not user.is_admin:
        raise Forbidden("Require Admin Role!")
    return user
