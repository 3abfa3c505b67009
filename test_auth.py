"""
Tests for registration, login, email verification, password reset and
token handling over the HTTP API.
"""
from datetime import timedelta

from checkout_buddy.models.base import utcnow
from conftest import GUEST_HEADERS


class TestRegistration:

    def test_register_returns_user_and_token(self, client, email_service):
        response = client.post(
            "/api/auth/register",
            json={"email": "a@b.com", "name": "Ann", "password": "secret1", "confirmPassword": "secret1"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        user = body["data"]["user"]
        assert user["id"]
        assert user["email"] == "a@b.com"
        assert user["verified"] is False
        assert "password" not in user
        assert "verificationCode" not in user
        assert "refreshToken" not in user
        assert body["data"]["token"]
        assert body["data"]["refreshToken"]

        sent = email_service.last("verification")
        assert sent["email"] == "a@b.com"
        assert sent["name"] == "Ann"

    def test_register_stores_code_expiring_one_hour_after_creation(self, register, load_user, email_service):
        register(email="carol@shopper.com", name="Carol")

        user = load_user("carol@shopper.com")
        assert user.verified is False
        assert len(user.verification_code) == 4
        assert 1000 <= int(user.verification_code) <= 9999
        assert user.verification_code == email_service.last("verification")["code"]
        assert user.verification_code_expires - user.created_at == timedelta(hours=1)
        assert user.password != "secret1"

    def test_register_lowercases_email(self, client, load_user):
        response = client.post(
            "/api/auth/register",
            json={"email": "Dave@Shopper.com", "name": "Dave", "password": "secret1", "confirmPassword": "secret1"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["user"]["email"] == "dave@shopper.com"
        assert load_user("dave@shopper.com") is not None

    def test_register_duplicate_email(self, client, register):
        register(email="ann@shopper.com")

        response = client.post(
            "/api/auth/register",
            json={"email": "ann@shopper.com", "name": "Ann", "password": "secret1", "confirmPassword": "secret1"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body == {
            "message": "Email already exist",
            "data": {"message": "Email already exist"},
            "success": False,
            "status": 400,
        }

    def test_register_password_mismatch(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "ann@shopper.com", "name": "Ann", "password": "secret1", "confirmPassword": "secret2"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Passwords do not match"

    def test_register_rejects_short_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "ann@shopper.com", "name": "Ann", "password": "abc", "confirmPassword": "abc"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["data"]["message"] == body["message"]
        assert "password" in body["message"]

    def test_register_succeeds_when_email_delivery_fails(self, client, email_service, load_user):
        email_service.fail = True

        response = client.post(
            "/api/auth/register",
            json={"email": "erin@shopper.com", "name": "Erin", "password": "secret1", "confirmPassword": "secret1"},
        )

        assert response.status_code == 201
        assert load_user("erin@shopper.com") is not None


class TestLogin:

    def test_login_success(self, client, register):
        account = register()

        response = client.post("/api/auth/login", json={"email": account["email"], "password": "secret1"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == account["id"]
        assert data["token"]
        assert data["refreshToken"] == account["refresh_token"]

    def test_unknown_email_and_wrong_password_are_indistinguishable(self, client, register):
        register()

        unknown = client.post("/api/auth/login", json={"email": "nobody@shopper.com", "password": "secret1"})
        wrong = client.post("/api/auth/login", json={"email": "ann@shopper.com", "password": "wrong-password"})

        assert unknown.status_code == wrong.status_code == 404
        assert unknown.json() == wrong.json()
        assert unknown.json()["message"] == "Invalid Credentials"

    def test_login_rotates_expired_refresh_token(self, client, register, change_user, load_user):
        account = register()
        change_user(account["email"], refresh_token="stale-token")

        response = client.post("/api/auth/login", json={"email": account["email"], "password": "secret1"})

        assert response.status_code == 200
        new_token = response.json()["data"]["refreshToken"]
        assert new_token != "stale-token"
        assert load_user(account["email"]).refresh_token == new_token


class TestEmailVerification:

    def test_verify_email_code(self, client, register, load_user, email_service):
        account = register()
        code = load_user(account["email"]).verification_code

        response = client.post("/api/auth/verify_email_code", json={"code": code})

        assert response.status_code == 200
        assert response.json()["message"] == "Verification successful"
        assert load_user(account["email"]).verified is True
        assert email_service.last("welcome")["email"] == account["email"]

    def test_verify_wrong_code(self, client, register, load_user):
        account = register()

        response = client.post("/api/auth/verify_email_code", json={"code": "0000"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid verification code"
        assert load_user(account["email"]).verified is False

    def test_verify_expired_code(self, client, register, load_user, change_user):
        account = register()
        code = load_user(account["email"]).verification_code
        change_user(account["email"], verification_code_expires=utcnow() - timedelta(minutes=1))

        response = client.post("/api/auth/verify_email_code", json={"code": code})

        assert response.status_code == 400
        assert response.json()["message"] == "Verification code has expired"
        assert load_user(account["email"]).verified is False

    def test_resend_verification_code(self, client, register, load_user, email_service):
        account = register()
        before = load_user(account["email"])

        response = client.patch("/api/auth/resend_verification_code", json={"email": account["email"]})

        assert response.status_code == 200
        after = load_user(account["email"])
        assert after.verification_code == email_service.last("verification")["code"]
        assert after.verification_code_expires >= before.verification_code_expires

    def test_resend_to_unknown_user(self, client):
        response = client.patch("/api/auth/resend_verification_code", json={"email": "ghost@shopper.com"})

        assert response.status_code == 404
        assert response.json()["message"] == "User does not exist"


class TestPasswordReset:

    def test_full_reset_flow(self, client, register, email_service):
        account = register()

        response = client.patch("/api/auth/forgot_password", json={"email": account["email"]})
        assert response.status_code == 200
        code = email_service.last("password_reset")["code"]

        response = client.post("/api/auth/verify_reset_code", json={"code": code})
        assert response.status_code == 200

        response = client.patch("/api/auth/reset_password", json={"newPassword": "brand-new", "code": code})
        assert response.status_code == 200

        old = client.post("/api/auth/login", json={"email": account["email"], "password": "secret1"})
        new = client.post("/api/auth/login", json={"email": account["email"], "password": "brand-new"})
        assert old.status_code == 404
        assert new.status_code == 200

    def test_forgot_password_unknown_email(self, client):
        response = client.patch("/api/auth/forgot_password", json={"email": "ghost@shopper.com"})

        assert response.status_code == 404
        assert response.json()["message"] == "Email does not exist"

    def test_reset_with_invalid_code(self, client, register):
        register()

        response = client.patch("/api/auth/reset_password", json={"newPassword": "brand-new", "code": "0000"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid reset code"

    def test_reset_with_expired_code(self, client, register, change_user, email_service):
        account = register()
        client.patch("/api/auth/forgot_password", json={"email": account["email"]})
        code = email_service.last("password_reset")["code"]
        change_user(account["email"], reset_password_code_expires=utcnow() - timedelta(seconds=1))

        verify = client.post("/api/auth/verify_reset_code", json={"code": code})
        reset = client.patch("/api/auth/reset_password", json={"newPassword": "brand-new", "code": code})

        assert verify.status_code == reset.status_code == 400
        assert reset.json()["message"] == "Reset code has expired"

    def test_resend_password_code(self, client, register, load_user, email_service):
        account = register()

        response = client.patch("/api/auth/resend_password_code", json={"email": account["email"]})

        assert response.status_code == 200
        assert load_user(account["email"]).reset_password_code == email_service.last("password_reset")["code"]


class TestTokens:

    def test_refresh_token(self, client, register):
        account = register()

        response = client.post("/api/auth/refresh_token", json={"refreshToken": account["refresh_token"]})

        assert response.status_code == 200
        token = response.json()["data"]["token"]
        assert client.get("/api/users", headers={"Authorization": f"Bearer {token}"}).status_code == 200

    def test_refresh_token_must_match_stored_token(self, client, register, change_user):
        account = register()
        change_user(account["email"], refresh_token="replaced")

        response = client.post("/api/auth/refresh_token", json={"refreshToken": account["refresh_token"]})

        assert response.status_code == 401

    def test_access_token_is_not_a_refresh_token(self, client, register):
        account = register()

        response = client.post("/api/auth/refresh_token", json={"refreshToken": account["token"]})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"

    def test_missing_token(self, client):
        response = client.get("/api/orders")

        assert response.status_code == 401
        assert response.json()["message"] == "Token not provided"

    def test_invalid_token(self, client):
        response = client.get("/api/orders", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_token_for_deleted_user(self, client, register):
        account = register()
        assert client.delete(f"/api/users/{account['id']}", headers=account["headers"]).status_code == 200

        response = client.get("/api/orders", headers=account["headers"])

        assert response.status_code == 401
        assert response.json()["message"] == "Token not authorized"

    def test_guest_token_is_accepted(self, client):
        response = client.get("/api/orders", headers=GUEST_HEADERS)

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestGoogleSignIn:

    def test_authorization_url(self, client):
        response = client.get("/api/auth/google/url")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["authorizationUrl"].startswith("https://accounts.google.com/")
        assert data["state"]

    def test_callback_creates_verified_user(self, client, google_oauth, load_user):
        response = client.post(
            "/api/auth/google/callback", json={"code": "auth-code", "state": google_oauth.VALID_STATE}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["email"] == "gina@gmail.com"
        assert data["user"]["verified"] is True
        assert data["token"]

        user = load_user("gina@gmail.com")
        assert user.google_user_id == "google-123"
        assert user.password is None
        assert user.verification_code is None

    def test_callback_links_existing_account(self, client, register, google_oauth, load_user):
        account = register(email="gina@gmail.com", name="Gina")

        response = client.post(
            "/api/auth/google/callback", json={"code": "auth-code", "state": google_oauth.VALID_STATE}
        )

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == account["id"]
        assert load_user("gina@gmail.com").google_user_id == "google-123"

    def test_callback_with_invalid_state(self, client):
        response = client.post("/api/auth/google/callback", json={"code": "auth-code", "state": "forged"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid state parameter"
