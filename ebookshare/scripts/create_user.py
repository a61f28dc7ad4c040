"""
Create a user (e.g. the first admin; there is no admin signup route). Run from project root:
  python -m ebookshare.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m ebookshare.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy.orm import Session, sessionmaker

from ebookshare.core.config import Settings, get_settings
from ebookshare.core.database import build_engine, build_session_factory
from ebookshare.core.errors import EbookShareError
from ebookshare.models import ROLE_NAMES
from ebookshare.schemas.auth import SignupRequest
from ebookshare.services import accounts


def create_user(
    session_factory: sessionmaker[Session],
    settings: Settings,
    username: str,
    email: str,
    password: str,
    role: str,
) -> int:
    """Create the user with the given role on top of the default one. Returns a process exit code."""
    db = session_factory()
    try:
        user = accounts.signup(
            db,
            SignupRequest(
                username=username,
                email=email,
                password=password,
                password_repeat=password,
            ),
            settings,
        )
        if role not in user.role_names:
            user.roles.append(accounts.get_or_create_role(db, role))
            db.commit()
        print(f"Created user '{user.username}' with roles {user.role_names}.")
        return 0
    except EbookShareError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an eBookShare user from the command line.")
    parser.add_argument("username", help="Username (3-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="admin", choices=list(ROLE_NAMES))
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    session_factory = build_session_factory(build_engine(settings))
    return create_user(session_factory, settings, args.username, args.email, args.password, args.role)


if __name__ == "__main__":
    sys.exit(main())
