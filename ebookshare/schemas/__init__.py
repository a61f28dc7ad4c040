"""Pydantic request/response schemas."""

from ebookshare.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    UserPublic,
)
from ebookshare.schemas.ebook import (
    EbookAddedResponse,
    EbookCreate,
    EbookDelete,
    EbookEdit,
    EbookListResponse,
    EbookOut,
    UploaderSnapshot,
)
from ebookshare.schemas.health import HealthResponse
from ebookshare.schemas.user import DeleteUserRequest, EditUserRequest, UsersListResponse

__all__ = [
    "DeleteUserRequest",
    "EbookAddedResponse",
    "EbookCreate",
    "EbookDelete",
    "EbookEdit",
    "EbookListResponse",
    "EbookOut",
    "EditUserRequest",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "SignupRequest",
    "UploaderSnapshot",
    "UserPublic",
    "UsersListResponse",
]
