"""Account endpoints: edit and delete, self-service or admin."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebookshare.api.deps import get_app_settings, get_current_identity, require_admin
from ebookshare.core.config import Settings
from ebookshare.core.database import get_db
from ebookshare.schemas.auth import Identity, MessageResponse
from ebookshare.schemas.user import DeleteUserRequest, EditUserRequest
from ebookshare.services import accounts

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


@router.put("/edit/user", response_model=MessageResponse)
def edit_user(
    body: EditUserRequest,
    db: DbSession,
    identity: CurrentIdentity,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """
    Edit username, email or password.

    - **Self-service** (no userID, or your own): oldPassword is required in
      addition to the bearer token.
    - **Admin** (userID of another user): requires the admin role; no password.
    """
    if body.user_id is None or body.user_id == identity.id:
        accounts.edit_own_account(db, identity.id, body, settings)
    else:
        admin = require_admin(identity, db)
        accounts.admin_edit_account(db, admin, body.user_id, body, settings)
    return MessageResponse(message="User profile edited successfully")


@router.delete("/delete/user", response_model=MessageResponse)
def delete_own_user(
    db: DbSession,
    identity: CurrentIdentity,
    body: DeleteUserRequest | None = None,
) -> MessageResponse:
    """Delete your own account and every eBook you uploaded. Requires your password."""
    accounts.delete_own_account(db, identity.id, body.password if body else None)
    return MessageResponse(message="Account deleted successfully")


@router.delete("/delete/user/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: DbSession,
    identity: CurrentIdentity,
    body: DeleteUserRequest | None = None,
) -> MessageResponse:
    """
    Delete an account and its eBooks. Your own id requires your password;
    another user's id requires the admin role.
    """
    if user_id == identity.id:
        accounts.delete_own_account(db, identity.id, body.password if body else None)
    else:
        admin = require_admin(identity, db)
        accounts.admin_delete_account(db, admin, user_id)
    return MessageResponse(message="Account deleted successfully")
