"""HTTP surface tests: status codes, bearer guard, ownership and JSON shapes via TestClient."""

import unittest
import uuid

from fastapi.testclient import TestClient

from app.core.database import get_db
from app.main import app
from tests.helpers import make_session_factory


class ApiTestCase(unittest.TestCase):
    """Routes the app's get_db dependency to a fresh in-memory database per test."""

    def setUp(self) -> None:
        session_factory = make_session_factory()

        def override_get_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)
        self.prefix = "/api/v1"

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def register(self, username: str, email: str, password: str = "secret1") -> dict:
        resp = self.client.post(
            f"{self.prefix}/users",
            json={"username": username, "email": email, "password": password},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def token_for(self, username: str, password: str = "secret1") -> dict[str, str]:
        resp = self.client.post(
            f"{self.prefix}/auth/login",
            json={"username": username, "password": password},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    def create_post(self, headers: dict[str, str], **body: str) -> dict:
        payload = {"title": "Hello World", "content": "This is a test post"}
        payload.update(body)
        resp = self.client.post(f"{self.prefix}/posts", json=payload, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


class TestAuthFlow(ApiTestCase):
    def test_register_login_scenario(self) -> None:
        user = self.register("alice", "alice@x.com", "secret1")
        self.assertNotIn("password", user)

        ok = self.client.post(
            f"{self.prefix}/auth/login",
            json={"username": "alice", "password": "secret1"},
        )
        self.assertEqual(ok.status_code, 200)
        body = ok.json()
        self.assertTrue(body["access_token"])
        self.assertTrue(body["refresh_token"])
        self.assertEqual(body["user"], {"id": user["id"], "username": "alice", "email": "alice@x.com"})

        bad = self.client.post(
            f"{self.prefix}/auth/login",
            json={"username": "alice", "password": "wrong1"},
        )
        self.assertEqual(bad.status_code, 401)
        self.assertEqual(bad.headers.get("www-authenticate"), "Bearer")

    def test_refresh_token(self) -> None:
        self.register("alice", "alice@x.com")
        login = self.client.post(
            f"{self.prefix}/auth/login",
            json={"username": "alice", "password": "secret1"},
        ).json()
        resp = self.client.post(
            f"{self.prefix}/auth/refresh-token",
            json={"refresh_token": login["refresh_token"]},
        )
        self.assertEqual(resp.status_code, 200)
        new_access = resp.json()["access_token"]
        created = self.client.post(
            f"{self.prefix}/posts",
            json={"title": "Fresh token", "content": "Posted with a refreshed token"},
            headers={"Authorization": f"Bearer {new_access}"},
        )
        self.assertEqual(created.status_code, 201)

    def test_refresh_rejects_access_token(self) -> None:
        self.register("alice", "alice@x.com")
        login = self.client.post(
            f"{self.prefix}/auth/login",
            json={"username": "alice", "password": "secret1"},
        ).json()
        resp = self.client.post(
            f"{self.prefix}/auth/refresh-token",
            json={"refresh_token": login["access_token"]},
        )
        self.assertEqual(resp.status_code, 401)


class TestUsersApi(ApiTestCase):
    def test_create_validation(self) -> None:
        resp = self.client.post(
            f"{self.prefix}/users",
            json={"username": "al", "email": "not-an-email", "password": "123"},
        )
        self.assertEqual(resp.status_code, 400)
        detail = resp.json()["detail"]
        self.assertTrue(any(line.startswith("username:") for line in detail))
        self.assertTrue(any(line.startswith("email:") for line in detail))
        self.assertTrue(any(line.startswith("password:") for line in detail))

    def test_update_validation(self) -> None:
        alice = self.register("alice", "alice@x.com")
        resp = self.client.patch(
            f"{self.prefix}/users/{alice['id']}",
            json={"email": "not-an-email"},
            headers=self.token_for("alice"),
        )
        self.assertEqual(resp.status_code, 400)

    def test_duplicate_username_409(self) -> None:
        self.register("alice", "alice@x.com")
        resp = self.client.post(
            f"{self.prefix}/users",
            json={"username": "alice", "email": "other@x.com", "password": "secret1"},
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json(), {"detail": "Username already exists"})

    def test_list_and_get(self) -> None:
        alice = self.register("alice", "alice@x.com")
        self.register("bob", "bob@x.com")
        listed = self.client.get(f"{self.prefix}/users").json()
        self.assertEqual([u["username"] for u in listed], ["alice", "bob"])
        for u in listed:
            self.assertNotIn("password", u)
            self.assertNotIn("passwordHash", u)
        got = self.client.get(f"{self.prefix}/users/{alice['id']}")
        self.assertEqual(got.status_code, 200)
        self.assertIn("createdAt", got.json())

    def test_get_unknown_and_malformed(self) -> None:
        self.assertEqual(
            self.client.get(f"{self.prefix}/users/{uuid.uuid4()}").status_code, 404
        )
        self.assertEqual(self.client.get(f"{self.prefix}/users/abc").status_code, 400)

    def test_update_self_only(self) -> None:
        alice = self.register("alice", "alice@x.com")
        bob = self.register("bob", "bob@x.com")
        alice_headers = self.token_for("alice")

        forbidden = self.client.patch(
            f"{self.prefix}/users/{bob['id']}",
            json={"username": "bobby"},
            headers=alice_headers,
        )
        self.assertEqual(forbidden.status_code, 403)

        ok = self.client.patch(
            f"{self.prefix}/users/{alice['id']}",
            json={"email": "alice@y.com"},
            headers=alice_headers,
        )
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["email"], "alice@y.com")
        self.assertEqual(ok.json()["username"], "alice")

    def test_update_requires_token(self) -> None:
        alice = self.register("alice", "alice@x.com")
        resp = self.client.patch(
            f"{self.prefix}/users/{alice['id']}", json={"username": "alicia"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_update_conflict(self) -> None:
        alice = self.register("alice", "alice@x.com")
        self.register("bob", "bob@x.com")
        resp = self.client.patch(
            f"{self.prefix}/users/{alice['id']}",
            json={"username": "bob"},
            headers=self.token_for("alice"),
        )
        self.assertEqual(resp.status_code, 409)

    def test_delete_self_cascades_posts(self) -> None:
        alice = self.register("alice", "alice@x.com")
        headers = self.token_for("alice")
        self.create_post(headers)

        resp = self.client.delete(f"{self.prefix}/users/{alice['id']}", headers=headers)
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(
            self.client.get(f"{self.prefix}/users/{alice['id']}").status_code, 404
        )
        self.assertEqual(self.client.get(f"{self.prefix}/posts").json(), [])
        # The token now names a deleted subject.
        again = self.client.delete(f"{self.prefix}/users/{alice['id']}", headers=headers)
        self.assertEqual(again.status_code, 401)


class TestPostsApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice", "alice@x.com")
        self.bob = self.register("bob", "bob@x.com")
        self.alice_headers = self.token_for("alice")
        self.bob_headers = self.token_for("bob")

    def test_create_requires_token(self) -> None:
        resp = self.client.post(
            f"{self.prefix}/posts",
            json={"title": "Hello World", "content": "This is a test post"},
        )
        self.assertEqual(resp.status_code, 401)

    def test_create_rejects_bad_token(self) -> None:
        resp = self.client.post(
            f"{self.prefix}/posts",
            json={"title": "Hello World", "content": "This is a test post"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        self.assertEqual(resp.status_code, 401)

    def test_create_validation(self) -> None:
        resp = self.client.post(
            f"{self.prefix}/posts",
            json={"title": "Hi", "content": "short"},
            headers=self.alice_headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get(f"{self.prefix}/posts").json(), [])

    def test_update_validation(self) -> None:
        post = self.create_post(self.alice_headers)
        url = f"{self.prefix}/posts/{post['id']}"
        resp = self.client.patch(url, json={"title": "x"}, headers=self.alice_headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"][0].split(":")[0], "title")
        self.assertEqual(self.client.get(url).json()["title"], "Hello World")

    def test_post_json_shape(self) -> None:
        post = self.create_post(self.alice_headers)
        self.assertEqual(
            set(post), {"id", "title", "content", "createdAt", "updatedAt", "user"}
        )
        self.assertEqual(
            post["user"],
            {"id": self.alice["id"], "username": "alice", "email": "alice@x.com"},
        )

    def test_list_newest_first(self) -> None:
        first = self.create_post(self.alice_headers, title="First post")
        second = self.create_post(self.bob_headers, title="Second post")
        listed = self.client.get(f"{self.prefix}/posts").json()
        self.assertEqual([p["id"] for p in listed], [second["id"], first["id"]])

    def test_ownership_scenario(self) -> None:
        post = self.create_post(
            self.alice_headers, title="Hello World", content="This is a test post"
        )
        url = f"{self.prefix}/posts/{post['id']}"

        denied = self.client.patch(url, json={"title": "Hacked"}, headers=self.bob_headers)
        self.assertEqual(denied.status_code, 403)

        updated = self.client.patch(
            url, json={"title": "Hello Again"}, headers=self.alice_headers
        )
        self.assertEqual(updated.status_code, 200)

        found = self.client.get(url).json()
        self.assertEqual(found["title"], "Hello Again")
        self.assertEqual(found["content"], "This is a test post")

    def test_get_unknown_and_malformed(self) -> None:
        self.assertEqual(
            self.client.get(f"{self.prefix}/posts/{uuid.uuid4()}").status_code, 404
        )
        resp = self.client.get(f"{self.prefix}/posts/abc")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"detail": "Invalid post ID"})

    def test_delete(self) -> None:
        post = self.create_post(self.alice_headers)
        url = f"{self.prefix}/posts/{post['id']}"
        self.assertEqual(self.client.delete(url, headers=self.bob_headers).status_code, 403)
        self.assertEqual(self.client.delete(url, headers=self.alice_headers).status_code, 204)
        self.assertEqual(self.client.delete(url, headers=self.alice_headers).status_code, 404)
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_delete_requires_token(self) -> None:
        post = self.create_post(self.alice_headers)
        resp = self.client.delete(f"{self.prefix}/posts/{post['id']}")
        self.assertEqual(resp.status_code, 401)


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get(f"{self.prefix}/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
