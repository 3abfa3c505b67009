"""
Tests for the user management endpoints.
"""
import pytest

from checkout_buddy.dependencies import get_order_service, get_scanned_history_service, get_user_service
from checkout_buddy.main import app
from conftest import GUEST_HEADERS
from test_orders import order_payload

PUBLIC_KEYS = {"id", "name", "email", "image", "location", "phoneNo", "verified", "createdAt", "updatedAt"}


class TestUsers:

    @pytest.fixture
    def ann(self, register):
        return register(email="ann@shopper.com", name="Ann")

    @pytest.fixture
    def bob(self, register):
        return register(email="bob@shopper.com", name="Bob")

    def test_list_users_uses_public_projection(self, client, ann, bob):
        response = client.get("/api/users", headers=ann["headers"])

        assert response.status_code == 200
        users = response.json()["data"]
        assert {user["email"] for user in users} == {"ann@shopper.com", "bob@shopper.com"}
        for user in users:
            assert set(user) == PUBLIC_KEYS
            assert user["image"] == ""

    def test_get_user(self, client, ann, bob):
        response = client.get(f"/api/users/{bob['id']}", headers=ann["headers"])

        assert response.status_code == 200
        assert response.json()["data"]["user"]["name"] == "Bob"

    def test_get_unknown_user(self, client, ann):
        response = client.get("/api/users/nope", headers=ann["headers"])

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_update_own_profile(self, client, ann, load_user):
        response = client.patch(
            f"/api/users/{ann['id']}",
            json={"name": "Annie", "phoneNo": "+44 7700 900000", "location": "London"},
            headers=ann["headers"],
        )

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["name"] == "Annie"
        assert user["phoneNo"] == "+44 7700 900000"
        assert user["location"] == "London"
        assert load_user("ann@shopper.com").name == "Annie"

    def test_update_email_to_taken_address(self, client, ann, bob):
        response = client.patch(f"/api/users/{ann['id']}", json={"email": "bob@shopper.com"}, headers=ann["headers"])

        assert response.status_code == 400
        assert response.json()["message"] == "Email already exist"

    def test_update_email(self, client, ann, load_user):
        response = client.patch(f"/api/users/{ann['id']}", json={"email": "Ann.New@Shopper.com"}, headers=ann["headers"])

        assert response.status_code == 200
        assert load_user("ann.new@shopper.com").id == ann["id"]

    def test_cannot_update_someone_else(self, client, ann, bob):
        response = client.patch(f"/api/users/{bob['id']}", json={"name": "Hacked"}, headers=ann["headers"])

        assert response.status_code == 403

    def test_admin_can_update_someone_else(self, client, ann, bob, change_user):
        change_user("ann@shopper.com", role="admin")

        response = client.patch(f"/api/users/{bob['id']}", json={"name": "Robert"}, headers=ann["headers"])

        assert response.status_code == 200
        assert response.json()["data"]["user"]["name"] == "Robert"

    def test_delete_own_account(self, client, ann):
        response = client.delete(f"/api/users/{ann['id']}", headers=ann["headers"])

        assert response.status_code == 200
        login = client.post("/api/auth/login", json={"email": "ann@shopper.com", "password": "secret1"})
        assert login.status_code == 404

    def test_cannot_delete_someone_else(self, client, ann, bob):
        response = client.delete(f"/api/users/{bob['id']}", headers=ann["headers"])

        assert response.status_code == 403


class TestGuestUsers:

    def test_list_users(self, client, register):
        register()

        response = client.get("/api/users", headers=GUEST_HEADERS)

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_get_user(self, client, register):
        account = register()

        response = client.get(f"/api/users/{account['id']}", headers=GUEST_HEADERS)

        assert response.status_code == 200
        assert response.json()["data"] == {}

    def test_update_user(self, client, register, load_user):
        account = register()

        response = client.patch(f"/api/users/{account['id']}", json={"name": "Guest"}, headers=GUEST_HEADERS)

        assert response.status_code == 200
        assert response.json()["data"] == {}
        assert load_user(account["email"]).name == "Ann"

    def test_delete_user(self, client, register):
        account = register()

        response = client.delete(f"/api/users/{account['id']}", headers=GUEST_HEADERS)

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied for guest users"


class UnreachableService:
    """Fails the test on any use."""

    def __getattr__(self, name):
        raise AssertionError(f"guest request reached storage: {name}")


class TestGuestSkipsStorage:

    @pytest.fixture
    def guest_client(self, client):
        for provider in (get_order_service, get_scanned_history_service, get_user_service):
            app.dependency_overrides[provider] = UnreachableService
        return client

    @pytest.mark.parametrize("method, url, body, expected", [
        ("GET", "/api/orders", None, []),
        ("GET", "/api/orders/any-id", None, {}),
        ("POST", "/api/orders", order_payload(), {}),
        ("GET", "/api/scanned", None, []),
        ("GET", "/api/scanned/any-id", None, {}),
        ("GET", "/api/scanned/users/user-1", None, []),
        ("POST", "/api/scanned/barcode/5000112637922", None, []),
        ("GET", "/api/users", None, []),
        ("GET", "/api/users/user-1", None, {}),
        ("PATCH", "/api/users/user-1", {"location": "Leeds"}, {}),
    ])
    def test_guest_reads_are_empty(self, guest_client, method, url, body, expected):
        response = guest_client.request(method, url, json=body, headers=GUEST_HEADERS)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["data"] == expected
