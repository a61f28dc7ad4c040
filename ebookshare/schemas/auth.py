"""Request/response schemas for signup, login and the authenticated identity."""

from pydantic import BaseModel, ConfigDict, Field

from ebookshare.models import User


class SignupRequest(BaseModel):
    """
    Signup form. Fields default to empty strings so the service can report
    the password mismatch before any other problem with the form.
    """

    username: str = Field(default="", description="Username (3-255 chars)")
    email: str = Field(default="", description="Email address")
    password: str = Field(default="", description="Password")
    password_repeat: str = Field(default="", description="Password, entered again")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class MessageResponse(BaseModel):
    message: str


class UserPublic(BaseModel):
    """Public user profile (no password)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str
    roles: list[str] = Field(default_factory=list)
    uploaded_books: list[int] = Field(default_factory=list, alias="uploadedBooks")

    @classmethod
    def from_model(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            roles=user.role_names,
            uploaded_books=[book.id for book in user.uploaded_books],
        )


class LoginResponse(BaseModel):
    """Token and profile returned after a successful login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: UserPublic


class Identity(BaseModel):
    """Caller identity resolved from a verified bearer token."""

    id: int
