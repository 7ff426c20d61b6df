import logging
import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from helios.auth.identity import derive_id
from helios.context import build_context
from helios.errors import AuthError, TransportError
from helios.web.app import create_app
from tests.fakes import FakeAuthClient, make_config


class WebAppTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.auth = FakeAuthClient()
        self.context = build_context(make_config(self.temp_dir.name), client=self.auth)
        self.client = TestClient(create_app(self.context))

    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in list(root.handlers):
            filename = getattr(handler, "baseFilename", "")
            if filename and filename.startswith(os.path.abspath(self.temp_dir.name)):
                root.removeHandler(handler)
                handler.close()
        self.temp_dir.cleanup()

    def _login(self, name: str = "bob") -> dict:
        self.auth.login_response = {"access": "A1", "refresh": "R1", "user": {"username": name}}
        response = self.client.post("/api/auth/login", json={"username": name, "password": "pw"})
        self.assertEqual(response.status_code, 200)
        return response.json()["data"]

    def test_login_hides_tokens(self) -> None:
        data = self._login()
        self.assertEqual(data["id"], derive_id("bob"))
        self.assertNotIn("accessToken", data)

    def test_login_validation_error(self) -> None:
        response = self.client.post("/api/auth/login", json={"username": "", "password": ""})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], 1)

    def test_login_remote_error_message(self) -> None:
        self.auth.login_error = AuthError("Invalid credentials", status_code=401)
        response = self.client.post("/api/auth/login", json={"username": "bob", "password": "x"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["msg"], "Invalid credentials")

    def test_login_transport_error(self) -> None:
        self.auth.login_error = TransportError("refused")
        response = self.client.post("/api/auth/login", json={"username": "bob", "password": "x"})
        self.assertEqual(response.status_code, 502)

    def test_validate(self) -> None:
        self._login()
        self.auth.valid_tokens.add("A1")
        response = self.client.post("/api/auth/validate")
        self.assertEqual(response.json()["data"], {"valid": True})

    def test_list_and_select_accounts(self) -> None:
        alice = self._login("alice")
        bob = self._login("bob")
        listing = self.client.get("/api/accounts").json()["data"]
        self.assertEqual(len(listing["accounts"]), 2)
        self.assertEqual(listing["selected"], bob["id"])

        response = self.client.put("/api/accounts/selected", json={"id": alice["id"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/accounts/selected").json()["data"]["id"], alice["id"])

        response = self.client.put("/api/accounts/selected", json={"id": "missing"})
        self.assertEqual(response.status_code, 404)

    def test_delete_account(self) -> None:
        bob = self._login()
        response = self.client.delete(f"/api/accounts/{bob['id']}")
        self.assertEqual(response.json()["data"], {"selected": None})
        self.assertEqual(self.client.delete(f"/api/accounts/{bob['id']}").status_code, 404)

    def test_auth_api_setting(self) -> None:
        response = self.client.put("/api/settings/auth-api", json={"url": "https://mine.example"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.context.store.document["settings"]["launcher"]["authAPI"], "https://mine.example")
        self.assertEqual(self.client.put("/api/settings/auth-api", json={"url": "ftp://x"}).status_code, 400)

    def test_logs(self) -> None:
        self._login()
        response = self.client.get("/api/logs", params={"limit": 50})
        self.assertEqual(response.status_code, 200)
        self.assertIsInstance(response.json()["data"], list)


if __name__ == "__main__":
    unittest.main()
