"""Tests for account endpoints."""

import pytest
from structlog.testing import capture_logs


class TestCreateUser:
    """Tests for POST /users/create."""

    def test_create_user(self, client, store):
        """Create user returns the username with 201."""
        response = client.post(
            "/users/create", json={"username": "alice", "password": "secret1"}
        )
        assert response.status_code == 201
        assert response.json() == {"username": "alice"}
        assert store.strings["user:alice:key"] == "secret1"

    def test_create_user_duplicate(self, client):
        """Creating the same user twice returns 409."""
        body = {"username": "alice", "password": "secret1"}
        assert client.post("/users/create", json=body).status_code == 201

        response = client.post("/users/create", json=body)
        assert response.status_code == 409
        assert response.json()["detail"] == "USER_EXISTS: alice"

    @pytest.mark.parametrize("username", ["", "al:ice"])
    def test_create_user_invalid_username(self, client, store, username):
        """Create user invalid username."""
        response = client.post(
            "/users/create", json={"username": username, "password": "secret1"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "INVALID_FIELD: username"
        assert store.calls == []

    def test_create_user_empty_password(self, client):
        """Create user empty password."""
        response = client.post(
            "/users/create", json={"username": "alice", "password": ""}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "INVALID_FIELD: password"

    def test_create_user_missing_field(self, client):
        """Create user missing field."""
        response = client.post("/users/create", json={"username": "alice"})
        assert response.status_code == 422

    def test_create_user_store_failure_is_generic(self, client, store):
        """Create user store failure is generic."""
        store.fail = True
        response = client.post(
            "/users/create", json={"username": "alice", "password": "secret1"}
        )
        assert response.status_code == 500
        assert response.json() == {"detail": "INTERNAL_SERVER_ERROR"}
        assert "refused" not in response.text


class TestAuthUser:
    """Tests for GET /users/auth."""

    def test_auth_success(self, client, alice):
        """Valid credential headers are authorized."""
        response = client.get("/users/auth", headers=alice)
        assert response.status_code == 200
        assert response.json() == {"authorized": "OK"}

    def test_auth_wrong_key(self, client, alice):
        """Wrong key header returns 401."""
        response = client.get(
            "/users/auth", headers={"x-auth-user": "alice", "x-auth-key": "wrong"}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "UNAUTHORIZED"

    def test_auth_missing_headers(self, client, alice):
        """Missing credential headers return 401."""
        assert client.get("/users/auth").status_code == 401
        assert client.get("/users/auth", headers={"x-auth-user": "alice"}).status_code == 401

    def test_auth_separator_in_username(self, client, alice, store):
        """Auth separator in username."""
        store.calls.clear()
        response = client.get(
            "/users/auth", headers={"x-auth-user": "alice:x", "x-auth-key": "secret1"}
        )
        assert response.status_code == 401
        assert store.calls == []

    def test_auth_store_failure_is_unauthorized(self, client, alice, store):
        """Auth store failure is unauthorized."""
        store.fail = True
        response = client.get("/users/auth", headers=alice)
        assert response.status_code == 401


class TestServerErrorLogging:
    """Tests for server-side logging of 500 responses."""

    def test_store_failure_logs_store_error(self, client, store):
        """Store failure is logged as store_error with the internal detail."""
        store.fail = True
        with capture_logs() as logs:
            client.post("/users/create", json={"username": "alice", "password": "secret1"})

        events = [entry for entry in logs if entry["event"] == "store_error"]
        assert len(events) == 1
        assert "refused" in events[0]["detail"]
        assert events[0]["log_level"] == "error"

    def test_write_not_applied_logs_request_failed(self, client, store):
        """A write the store did not apply is logged as request_failed."""
        store.reject_writes = True
        with capture_logs() as logs:
            client.post("/users/create", json={"username": "alice", "password": "secret1"})

        events = [entry for entry in logs if entry["event"] == "request_failed"]
        assert len(events) == 1
        assert events[0]["detail"] == "could not create user"
