"""Shared builders for API tests: isolated app on in-memory SQLite, users and tokens."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from ebookshare.core.config import Settings
from ebookshare.main import create_app
from ebookshare.models import Base
from ebookshare.schemas.auth import SignupRequest
from ebookshare.services import accounts

DEFAULT_PASSWORD = "password123"
TEST_JWT_SECRET = "unit-test-signing-key-0123456789abcdef"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: in-memory DB, fixed secret, cheapest bcrypt cost. Ignores .env."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_JWT_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_app(**overrides: object) -> FastAPI:
    app = create_app(make_settings(**overrides))
    Base.metadata.create_all(app.state.engine)
    return app


def make_client(**overrides: object) -> TestClient:
    return TestClient(make_app(**overrides))


def signup(
    client: TestClient,
    username: str,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
):
    return client.post(
        "/api/signup",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
            "password_repeat": password,
        },
    )


def login_token(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> str:
    res = client.post("/api/login", json={"username": username, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def register_and_login(client: TestClient, username: str) -> dict[str, str]:
    """Sign up and log in; return Authorization headers for the new user."""
    res = signup(client, username)
    assert res.status_code == 200, res.text
    return auth_headers(login_token(client, username))


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_admin(client: TestClient, username: str = "admin") -> dict[str, str]:
    """Create a user holding the admin role directly through the service layer; return its headers."""
    app = client.app
    db = app.state.session_factory()
    try:
        user = accounts.signup(
            db,
            SignupRequest(
                username=username,
                email=f"{username}@example.com",
                password=DEFAULT_PASSWORD,
                password_repeat=DEFAULT_PASSWORD,
            ),
            app.state.settings,
        )
        user.roles.append(accounts.get_or_create_role(db, "admin"))
        db.commit()
    finally:
        db.close()
    return auth_headers(login_token(client, username))


def upload_ebook(client: TestClient, headers: dict[str, str], **fields: object):
    body = {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "publicationYear": 1965,
        "content": "A beginning is the time for taking the most delicate care...",
    }
    body.update(fields)
    return client.post("/api/add/ebook", json=body, headers=headers)
