"""Request/response schemas for account management."""

from pydantic import BaseModel, ConfigDict, Field

from ebookshare.schemas.auth import UserPublic


class EditUserRequest(BaseModel):
    """
    Account edit. Without userID (or with the caller's own id) this is a
    self-service edit and oldPassword is required; with another user's id it
    is an admin edit.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: int | None = Field(default=None, alias="userID")
    old_password: str | None = Field(default=None, alias="oldPassword")
    new_username: str | None = Field(default=None, alias="newUsername")
    new_email: str | None = Field(default=None, alias="newEmail")
    new_password: str | None = Field(default=None, alias="newPassword")


class DeleteUserRequest(BaseModel):
    """Current password, required for self-service deletion."""

    password: str | None = None


class UsersListResponse(BaseModel):
    """Response for GET /admin/users (admin only)."""

    users: list[UserPublic] | str
