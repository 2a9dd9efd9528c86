import unittest
from datetime import datetime, timedelta, timezone

import jwt
from flask_jwt_extended import create_access_token, create_refresh_token

from support import ApiTestCase

from ipblogs.errors import InvalidToken
from ipblogs.services.token_service import issue_token, verify_token


class TestTokenService(ApiTestCase):
    def test_issued_token_expires_after_one_day(self):
        with self.app.app_context():
            token = issue_token(7, "g@example.com")
        payload = jwt.decode(token, "test-secret", algorithms=["HS256"])

        self.assertEqual(payload["id"], 7)
        self.assertEqual(payload["email"], "g@example.com")
        self.assertEqual(payload["sub"], "7")
        self.assertAlmostEqual(payload["exp"] - payload["iat"], 24 * 60 * 60, delta=1)

    def test_verify_rejects_foreign_signature(self):
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {
                "sub": "1",
                "id": 1,
                "email": "a@example.com",
                "type": "access",
                "iat": now,
                "exp": now + timedelta(hours=1),
            },
            "some-other-secret",
            algorithm="HS256",
        )
        with self.app.app_context():
            with self.assertRaises(InvalidToken):
                verify_token(forged)

    def test_verify_rejects_expired_token(self):
        with self.app.app_context():
            token = create_access_token(
                identity="1",
                additional_claims={"id": 1, "email": "a@example.com"},
                expires_delta=timedelta(seconds=-10),
            )
            with self.assertRaises(InvalidToken):
                verify_token(token)

    def test_verify_rejects_garbage(self):
        with self.app.app_context():
            with self.assertRaises(InvalidToken):
                verify_token("not.a.token")

    def test_verify_rejects_refresh_token(self):
        with self.app.app_context():
            token = create_refresh_token(
                identity="1",
                additional_claims={"id": 1, "email": "a@example.com"},
            )
            with self.assertRaises(InvalidToken):
                verify_token(token)

    def test_verify_rejects_token_without_identity_claims(self):
        with self.app.app_context():
            token = create_access_token(identity="1")
            with self.assertRaises(InvalidToken):
                verify_token(token)


class TestAuthMiddleware(ApiTestCase):
    def _post(self, headers=None):
        return self.client.post(
            "/posts",
            data={"title": "t", "description": "d", "content": "c"},
            headers=headers or {},
            content_type="multipart/form-data",
        )

    def test_missing_header_returns_401(self):
        response = self._post()
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["msg"], "Token missing")

    def test_non_bearer_header_returns_401(self):
        response = self._post({"Authorization": "Basic dXNlcjpwYXNz"})
        self.assertEqual(response.status_code, 401)

    def test_invalid_token_returns_403(self):
        response = self._post({"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["msg"], "Invalid token")

    def test_expired_token_returns_403(self):
        self._register("alice")
        with self.app.app_context():
            token = create_access_token(
                identity="1",
                additional_claims={"id": 1, "email": "alice@example.com"},
                expires_delta=timedelta(seconds=-10),
            )

        response = self._post({"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 403)

        with self.app.app_context():
            from ipblogs.models.post_model import Post
            self.assertEqual(Post.query.count(), 0)

    def test_refresh_token_returns_403(self):
        self._register("alice")
        with self.app.app_context():
            token = create_refresh_token(
                identity="1",
                additional_claims={"id": 1, "email": "alice@example.com"},
            )

        response = self._post({"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["msg"], "Invalid token")

    def test_token_without_identity_claims_returns_403(self):
        self._register("alice")
        with self.app.app_context():
            token = create_access_token(identity="1")

        response = self._post({"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["msg"], "Invalid token")

    def test_valid_token_reaches_the_view(self):
        self._register("alice")
        response = self._post(self._auth_header("alice@example.com"))
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()["user_id"], 1)


if __name__ == "__main__":
    unittest.main()
