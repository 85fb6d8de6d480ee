"""HTTP tests for /api/users: register, login, logout, and the full session walkthrough."""

import unittest

from rollcall.models import User
from tests.support import ApiTestMixin


class TestRegisterEndpoint(ApiTestMixin, unittest.TestCase):
    def test_created_without_password(self) -> None:
        response = self.register()
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["username"], "alice")
        self.assertEqual(body["user"]["role"], "USER")
        self.assertNotIn("password", body["user"])
        self.assertNotIn("password_hash", body["user"])
        self.assertNotIn("secret123", response.text)

    def test_missing_fields(self) -> None:
        response = self.client.post("/api/users/register", json={"username": "alice"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"success": False, "message": "All required fields must be filled."},
        )

    def test_wrong_body_type_is_400(self) -> None:
        response = self.client.post(
            "/api/users/register",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_duplicate_is_409(self) -> None:
        self.register()
        response = self.register(username="alice2")
        self.assertEqual(response.status_code, 409)
        self.assertFalse(response.json()["success"])

    def test_second_admin_is_403(self) -> None:
        self.assertEqual(self.register(role="ADMIN").status_code, 201)
        response = self.register(username="bob", email="b@x.com", role="ADMIN")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["message"],
            "An ADMIN user already exists. Only one ADMIN is allowed.",
        )

    def test_unknown_role_is_400(self) -> None:
        self.assertEqual(self.register(role="ROOT").status_code, 400)


class TestLoginEndpoint(ApiTestMixin, unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register()

    def test_success(self) -> None:
        response = self.login()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["email"], "a@x.com")
        self.assertNotIn("password_hash", body["user"])
        claims = self.tokens.verify(body["token"])
        self.assertEqual((claims.username, claims.role), ("alice", "USER"))

    def test_missing_fields(self) -> None:
        response = self.client.post("/api/users/login", json={"email": "a@x.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Email and password are required.")

    def test_failures_do_not_reveal_cause(self) -> None:
        wrong_password = self.login(password="wrong")
        unknown_email = self.login(email="nobody@x.com")
        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(unknown_email.status_code, 401)
        self.assertEqual(wrong_password.json(), unknown_email.json())


class TestLogoutEndpoint(ApiTestMixin, unittest.TestCase):
    def test_clears_cookie_but_token_stays_valid(self) -> None:
        self.register()
        token = self.login().json()["token"]
        response = self.client.post("/api/users/logout", headers=self.auth_headers(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"success": True, "message": "User logged out successfully."}
        )
        self.assertIn("token=", response.headers.get("set-cookie", ""))
        # No revocation: the token still opens protected routes until it expires.
        after = self.client.get("/api/students", headers=self.auth_headers(token))
        self.assertNotEqual(after.status_code, 401)


class TestSessionWalkthrough(ApiTestMixin, unittest.TestCase):
    """Register, fail and succeed at login, use the token, then outlive it."""

    def test_walkthrough(self) -> None:
        response = self.register()
        self.assertEqual(response.status_code, 201)
        with self.Session() as db:
            self.assertEqual(db.query(User).filter(User.email == "a@x.com").one().role, "USER")

        self.assertEqual(self.register(username="alice-again").status_code, 409)

        response = self.login(password="wrong")
        self.assertEqual(response.status_code, 401)

        response = self.login()
        self.assertEqual(response.status_code, 200)
        token = response.json()["token"]
        alice_id = response.json()["user"]["id"]

        self.clock.advance(59 * 60)
        response = self.client.get("/api/students", headers=self.auth_headers(token))
        self.assertNotEqual(response.status_code, 401)
        with self.assertLogs("rollcall.api.v1.students", level="INFO") as logs:
            response = self.client.post(
                "/api/students",
                json={
                    "first_name": "Ada",
                    "last_name": "Lovelace",
                    "email": "ada@x.com",
                    "phone": "555-0100",
                    "gender": "Female",
                },
                headers=self.auth_headers(token),
            )
        self.assertEqual(response.status_code, 201)
        self.assertIn(f"by user id={alice_id}", logs.output[0])

        self.clock.advance(60)
        response = self.client.get("/api/students", headers=self.auth_headers(token))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Token has expired. Please login again.")


if __name__ == "__main__":
    unittest.main()
