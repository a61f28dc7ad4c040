"""Service-level errors. Each carries the HTTP status it is reported with."""


class EbookShareError(Exception):
    """Base error; the API turns it into a JSON body with a `message` field."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InvalidInput(EbookShareError):
    """Malformed or missing input."""

    status_code = 400


class PasswordMismatch(InvalidInput):
    """Password and its confirmation differ."""


class WeakPassword(InvalidInput):
    """Password is shorter (or longer) than allowed."""


class DuplicateCredential(EbookShareError):
    """Username or email already belongs to another user."""

    status_code = 409


class AuthError(EbookShareError):
    """Authentication failed."""

    status_code = 401


class MissingToken(AuthError):
    """No bearer token on a protected route."""

    status_code = 403


class InvalidToken(AuthError):
    """Bearer token is malformed, forged or expired."""


class BadCredential(AuthError):
    """Password does not match the stored hash."""


class UnknownUser(AuthError):
    """Login for a username that does not exist."""

    status_code = 400


class Forbidden(EbookShareError):
    """Authenticated, but not allowed to perform this action."""

    status_code = 403


class NotFound(EbookShareError):
    """Target of a mutation does not exist."""

    status_code = 404


class PayloadTooLarge(EbookShareError):
    status_code = 413


class PersistenceError(EbookShareError):
    """Database failure."""

    status_code = 500
