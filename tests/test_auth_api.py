"""API tests for signup, login and the bearer-token dependency."""

import unittest
from datetime import UTC, datetime, timedelta

from ebookshare.core.security import create_access_token
from tests.support import (
    DEFAULT_PASSWORD,
    auth_headers,
    login_token,
    make_client,
    signup,
)


class TestSignup(unittest.TestCase):
    """Validation order: password mismatch, form fields, then duplicates."""

    def setUp(self) -> None:
        self.client = make_client()

    def test_success_returns_message_and_no_token(self) -> None:
        res = signup(self.client, "alice")
        self.assertEqual(res.status_code, 200, res.text)
        self.assertEqual(res.json(), {"message": "User was registered successfully!"})

    def test_password_mismatch_reported_before_other_problems(self) -> None:
        res = self.client.post(
            "/api/signup",
            json={"username": "x", "email": "not-an-email", "password": "a", "password_repeat": "b"},
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Both passwords must match")

    def test_password_mismatch_even_when_username_taken(self) -> None:
        signup(self.client, "alice")
        res = self.client.post(
            "/api/signup",
            json={
                "username": "alice",
                "email": "alice@example.com",
                "password": DEFAULT_PASSWORD,
                "password_repeat": DEFAULT_PASSWORD + "x",
            },
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Both passwords must match")

    def test_weak_password(self) -> None:
        res = signup(self.client, "alice", password="short")
        self.assertEqual(res.status_code, 400)
        self.assertIn("password", res.json()["message"])

    def test_short_username(self) -> None:
        res = signup(self.client, "al", email="al@example.com")
        self.assertEqual(res.status_code, 400)
        self.assertIn("username", res.json()["message"])

    def test_invalid_email(self) -> None:
        res = signup(self.client, "alice", email="alice-at-example")
        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.json()["message"])

    def test_duplicate_username(self) -> None:
        signup(self.client, "alice")
        res = signup(self.client, "alice", email="other@example.com")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.json()["message"], "Failed! Username is already in use!")

    def test_duplicate_email_case_insensitive(self) -> None:
        signup(self.client, "alice")
        res = signup(self.client, "bob", email="ALICE@example.com")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.json()["message"], "Failed! Email is already in use!")


class TestLogin(unittest.TestCase):
    def setUp(self) -> None:
        self.client = make_client()
        signup(self.client, "alice")

    def test_wrong_password_is_401(self) -> None:
        res = self.client.post("/api/login", json={"username": "alice", "password": "wrong"})
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "Invalid Password!")

    def test_unknown_user_is_400(self) -> None:
        res = self.client.post("/api/login", json={"username": "nobody", "password": DEFAULT_PASSWORD})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "User Not found.")

    def test_username_is_trimmed_like_signup(self) -> None:
        signup(self.client, " carol ", email="carol@example.com")
        res = self.client.post("/api/login", json={"username": " carol ", "password": DEFAULT_PASSWORD})
        self.assertEqual(res.status_code, 200, res.text)
        self.assertEqual(res.json()["user"]["username"], "carol")

    def test_success_returns_token_and_public_profile(self) -> None:
        res = self.client.post("/api/login", json={"username": "alice", "password": DEFAULT_PASSWORD})
        self.assertEqual(res.status_code, 200, res.text)
        body = res.json()
        self.assertTrue(body["token"])
        user = body["user"]
        self.assertEqual(user["username"], "alice")
        self.assertEqual(user["email"], "alice@example.com")
        self.assertEqual(user["roles"], ["user"])
        self.assertEqual(user["uploadedBooks"], [])
        self.assertNotIn("password", user)
        self.assertNotIn("password_hash", user)

    def test_missing_field_is_400_with_message(self) -> None:
        res = self.client.post("/api/login", json={"username": "alice"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Invalid request body.")


class TestBearerDependency(unittest.TestCase):
    """Protected routes: missing token 403, invalid or expired token 401."""

    def setUp(self) -> None:
        self.client = make_client()
        signup(self.client, "alice")

    def test_missing_token_is_403(self) -> None:
        res = self.client.get("/api/ebooks")
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.json()["message"], "No token provided!")

    def test_non_bearer_scheme_is_missing_token(self) -> None:
        res = self.client.get("/api/ebooks", headers={"Authorization": "Basic abc"})
        self.assertEqual(res.status_code, 403)

    def test_garbage_token_is_401(self) -> None:
        res = self.client.get("/api/ebooks", headers=auth_headers("garbage"))
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "Unauthorized!")
        self.assertEqual(res.headers.get("www-authenticate"), "Bearer")

    def test_expired_token_is_401(self) -> None:
        settings = self.client.app.state.settings
        issued = datetime.now(UTC) - timedelta(minutes=settings.JWT_EXPIRE_MINUTES + 1)
        token = create_access_token(1, settings, now=issued)
        res = self.client.get("/api/ebooks", headers=auth_headers(token))
        self.assertEqual(res.status_code, 401)

    def test_valid_token_passes(self) -> None:
        token = login_token(self.client, "alice")
        res = self.client.get("/api/ebooks", headers=auth_headers(token))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"ebooks": []})


if __name__ == "__main__":
    unittest.main()
