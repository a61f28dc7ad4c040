"""Account lifecycle: signup, login, self-service and admin edit/delete with eBook cascade."""

import logging
import re

from sqlalchemy import func
from sqlalchemy.orm import Session

from ebookshare.core.config import Settings
from ebookshare.core.errors import (
    BadCredential,
    DuplicateCredential,
    Forbidden,
    InvalidInput,
    NotFound,
    PasswordMismatch,
    UnknownUser,
    WeakPassword,
)
from ebookshare.core.security import (
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    create_access_token,
    hash_password,
    verify_password,
)
from ebookshare.models import Role, User
from ebookshare.schemas.auth import SignupRequest
from ebookshare.schemas.user import EditUserRequest

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
DEFAULT_ROLE = "user"


def validate_username(username: str) -> None:
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        raise InvalidInput(
            f"Please enter a username with {USERNAME_MIN_LEN} to {USERNAME_MAX_LEN} chars"
        )


def validate_email(email: str) -> None:
    if len(email) > EMAIL_MAX_LEN or not EMAIL_PATTERN.match(email):
        raise InvalidInput("Please enter a valid email address")


def validate_password(password: str, settings: Settings) -> None:
    if not (settings.PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise WeakPassword(
            f"Please enter a password with {settings.PASSWORD_MIN_LEN} to {PASSWORD_MAX_LEN} chars"
        )


def ensure_username_free(db: Session, username: str, exclude_id: int | None = None) -> None:
    query = db.query(User).filter(User.username == username)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first() is not None:
        raise DuplicateCredential("Failed! Username is already in use!")


def ensure_email_free(db: Session, email: str, exclude_id: int | None = None) -> None:
    query = db.query(User).filter(func.lower(User.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first() is not None:
        raise DuplicateCredential("Failed! Email is already in use!")


def get_or_create_role(db: Session, name: str) -> Role:
    """Return the role row with this name, creating it if the table has not been seeded."""
    role = db.query(Role).filter(Role.name == name).first()
    if role is None:
        role = Role(name=name)
        db.add(role)
        db.flush()
    return role


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found.")
    return user


def signup(db: Session, body: SignupRequest, settings: Settings) -> User:
    """
    Register a new user with the 'user' role. No token is issued.

    The password mismatch is reported before any other validation problem;
    duplicates are checked only once the form itself is valid.
    """
    if body.password != body.password_repeat:
        raise PasswordMismatch("Both passwords must match")
    username = body.username.strip()
    email = body.email.strip()
    validate_username(username)
    validate_email(email)
    validate_password(body.password, settings)
    ensure_username_free(db, username)
    ensure_email_free(db, email)

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
    )
    user.roles.append(get_or_create_role(db, DEFAULT_ROLE))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id, "username": user.username})
    return user


def login(db: Session, username: str, password: str, settings: Settings) -> tuple[str, User]:
    """Check credentials and return (access_token, user)."""
    username = username.strip()
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        logger.info("Login failed: unknown user", extra={"username": username})
        raise UnknownUser("User Not found.")
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: bad password", extra={"user_id": user.id})
        raise BadCredential("Invalid Password!")
    token = create_access_token(user.id, settings)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return token, user


def _apply_account_changes(
    db: Session,
    user: User,
    body: EditUserRequest,
    settings: Settings,
) -> list[str]:
    """Validate every requested change first, then write them all. Returns changed field names."""
    new_username = (body.new_username or "").strip()
    new_email = (body.new_email or "").strip()
    new_password = body.new_password or ""
    if not (new_username or new_email or new_password):
        raise InvalidInput("No changes submitted. Provide newUsername, newEmail or newPassword.")

    if new_username:
        validate_username(new_username)
        ensure_username_free(db, new_username, exclude_id=user.id)
    if new_email:
        validate_email(new_email)
        ensure_email_free(db, new_email, exclude_id=user.id)
    if new_password:
        validate_password(new_password, settings)

    changed: list[str] = []
    if new_username:
        user.username = new_username
        changed.append("username")
    if new_email:
        user.email = new_email
        changed.append("email")
    if new_password:
        user.password_hash = hash_password(new_password, rounds=settings.BCRYPT_ROUNDS)
        changed.append("password")
    db.commit()
    return changed


def edit_own_account(
    db: Session,
    user_id: int,
    body: EditUserRequest,
    settings: Settings,
) -> User:
    """Self-service edit. The current password must be re-submitted even with a valid token."""
    user = get_user(db, user_id)
    if not body.old_password or not verify_password(body.old_password, user.password_hash):
        logger.warning("Account edit refused: password mismatch", extra={"user_id": user_id})
        raise BadCredential("Password does not match with user")
    changed = _apply_account_changes(db, user, body, settings)
    logger.info("Account edited", extra={"user_id": user_id, "fields": ",".join(changed)})
    return user


def admin_edit_account(
    db: Session,
    admin: User,
    target_id: int,
    body: EditUserRequest,
    settings: Settings,
) -> User:
    """Admin edit of another account; trust comes from the admin's token alone."""
    if not admin.is_admin:
        raise Forbidden("Require Admin Role!")
    target = get_user(db, target_id)
    changed = _apply_account_changes(db, target, body, settings)
    logger.info(
        "Account edited by admin",
        extra={"admin_id": admin.id, "user_id": target_id, "fields": ",".join(changed)},
    )
    return target


def _delete_account_cascade(db: Session, user: User) -> int:
    """Delete every eBook the user owns, then the user, in one transaction."""
    books = list(user.uploaded_books)
    user.uploaded_books.clear()
    for book in books:
        db.delete(book)
    db.flush()
    db.delete(user)
    db.commit()
    return len(books)


def delete_own_account(db: Session, user_id: int, password: str | None) -> int:
    """Self-service delete; requires the current password. Returns number of eBooks removed."""
    user = get_user(db, user_id)
    if not password or not verify_password(password, user.password_hash):
        logger.warning("Account delete refused: password mismatch", extra={"user_id": user_id})
        raise BadCredential("Password does not match with user")
    deleted_books = _delete_account_cascade(db, user)
    logger.info(
        "Account deleted",
        extra={"user_id": user_id, "ebooks_deleted": deleted_books},
    )
    return deleted_books


def admin_delete_account(db: Session, admin: User, target_id: int) -> int:
    """Admin delete of another account with the same cascade; no password."""
    if not admin.is_admin:
        raise Forbidden("Require Admin Role!")
    target = get_user(db, target_id)
    deleted_books = _delete_account_cascade(db, target)
    logger.info(
        "Account deleted by admin",
        extra={"admin_id": admin.id, "user_id": target_id, "ebooks_deleted": deleted_books},
    )
    return deleted_books


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()
