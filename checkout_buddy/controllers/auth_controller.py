"""
Credential lifecycle: registration, login, email verification, password
reset, code resends, access-token refresh and Google sign-in.
"""
import enum
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional, Tuple

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from checkout_buddy.core.exceptions import (
    EmailDeliveryError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    error_boundary,
)
from checkout_buddy.core.responses import respond
from checkout_buddy.models.base import utcnow
from checkout_buddy.models.users import User
from checkout_buddy.schemas.auth import (
    AuthPayload,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from checkout_buddy.schemas.users import UserPublic
from checkout_buddy.services.auth_service import AuthService
from checkout_buddy.services.email_service import EmailService
from checkout_buddy.services.google_oauth_service import GoogleOAuthService
from checkout_buddy.services.user_service import UserService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid Credentials"
CODE_ATTEMPTS = 10


class CodePurpose(str, enum.Enum):
    VERIFICATION = "verification"
    PASSWORD_RESET = "password_reset"


class AuthController:

    def __init__(
        self,
        user_service: UserService,
        email_service: EmailService,
        auth_service: AuthService,
        google_oauth_service: GoogleOAuthService,
    ):
        self.user_service = user_service
        self.email_service = email_service
        self.auth_service = auth_service
        self.google_oauth_service = google_oauth_service

    def _auth_payload(self, user: User, token: str, refresh_token: Optional[str]) -> AuthPayload:
        return AuthPayload(user=UserPublic.model_validate(user), token=token, refresh_token=refresh_token)

    async def _new_code(
        self, lookup: Callable[[str], Awaitable[Optional[User]]], now: Optional[datetime] = None
    ) -> Tuple[str, datetime]:
        """Generate a code no other user currently holds."""
        for _ in range(CODE_ATTEMPTS):
            code, expires = self.auth_service.generate_code(now)
            if await lookup(code) is None:
                return code, expires
        raise RuntimeError("Could not generate an unused one-time code")

    async def _notify(self, send: Awaitable[None], what: str, email: str) -> None:
        # Email is incidental to these flows; delivery failures are logged only
        try:
            await send
        except EmailDeliveryError as e:
            logger.warning(f"Could not send {what} email to {email}: {e}")

    async def _current_refresh_token(self, user: User) -> str:
        """Reuse the stored refresh token while valid, otherwise rotate it."""
        if self.auth_service.is_refresh_token_valid(user.refresh_token):
            return user.refresh_token
        refresh_token = self.auth_service.generate_refresh_token(user.email)
        await self.user_service.update_user(user.id, {"refresh_token": refresh_token})
        return refresh_token

    @error_boundary()
    async def register(self, data: RegisterRequest) -> JSONResponse:
        if data.password != data.confirm_password:
            raise ValidationError("Passwords do not match")

        email = data.email.lower()
        if await self.user_service.find_by_email(email):
            raise ValidationError("Email already exist")

        now = utcnow()
        refresh_token = self.auth_service.generate_refresh_token(email)
        password = self.auth_service.hash_password(data.password)

        for _ in range(CODE_ATTEMPTS):
            code, code_expires = await self._new_code(self.user_service.find_by_verification_code, now)
            try:
                user = await self.user_service.create_user({
                    "name": data.name,
                    "email": email,
                    "password": password,
                    "verification_code": code,
                    "verification_code_expires": code_expires,
                    "refresh_token": refresh_token,
                    "created_at": now,
                    "updated_at": now,
                })
                break
            except IntegrityError:
                # Either a concurrent registration took the email or another user took the code
                if await self.user_service.find_by_email(email):
                    raise ValidationError("Email already exist")
                logger.warning(f"Verification code clash while registering {email}, retrying")
        else:
            raise RuntimeError("Could not allocate a unique verification code")

        await self._notify(
            self.email_service.send_verification_code(email, user.name, code), "verification", email
        )

        token = self.auth_service.generate_access_token(user.id, user.email)
        logger.info(f"User registered: {email} (ID: {user.id})")

        return respond(
            "Registration was successful. Please check your email for the verification code.",
            self._auth_payload(user, token, refresh_token),
            status.HTTP_201_CREATED,
        )

    @error_boundary()
    async def login(self, data: LoginRequest) -> JSONResponse:
        user = await self.user_service.find_by_email(data.email)

        # Same answer for unknown email and wrong password
        if user is None or not self.auth_service.verify_password(data.password, user.password):
            raise NotFoundError(INVALID_CREDENTIALS)

        token = self.auth_service.generate_access_token(user.id, user.email)
        refresh_token = await self._current_refresh_token(user)

        logger.info(f"User logged in: {user.email} (ID: {user.id})")
        return respond("Login was successful", self._auth_payload(user, token, refresh_token))

    @error_boundary()
    async def verify_email_code(self, code: str) -> JSONResponse:
        user = await self.user_service.find_by_verification_code(code)
        if user is None:
            raise ValidationError("Invalid verification code")
        if user.verification_code_expires is None or utcnow() > user.verification_code_expires:
            raise ValidationError("Verification code has expired")

        await self.user_service.update_user(user.id, {"verified": True})
        await self._notify(self.email_service.send_welcome_email(user.email, user.name), "welcome", user.email)

        logger.info(f"Email verified for user {user.id}")
        return respond("Verification successful")

    @error_boundary()
    async def forgot_password(self, email: str) -> JSONResponse:
        user = await self.user_service.find_by_email(email)
        if user is None:
            raise NotFoundError("Email does not exist")

        code, code_expires = await self._new_code(self.user_service.find_by_reset_code)
        await self._notify(
            self.email_service.send_forgot_password_email(user.email, user.name, code),
            "password reset",
            user.email,
        )
        await self.user_service.update_user(
            user.id, {"reset_password_code": code, "reset_password_code_expires": code_expires}
        )

        return respond("Request was successful, check your email for more details")

    async def _user_with_valid_reset_code(self, code: str) -> User:
        user = await self.user_service.find_by_reset_code(code)
        if user is None:
            raise ValidationError("Invalid reset code")
        if user.reset_password_code_expires is None or utcnow() > user.reset_password_code_expires:
            raise ValidationError("Reset code has expired")
        return user

    @error_boundary()
    async def verify_reset_code(self, code: str) -> JSONResponse:
        await self._user_with_valid_reset_code(code)
        return respond("Verification successful")

    @error_boundary()
    async def reset_password(self, data: ResetPasswordRequest) -> JSONResponse:
        user = await self._user_with_valid_reset_code(data.code)

        # TODO: clear reset_password_code here once clients stop re-submitting
        # the same code after a successful reset.
        await self.user_service.update_user(
            user.id, {"password": self.auth_service.hash_password(data.new_password)}
        )

        logger.info(f"Password reset for user {user.id}")
        return respond("Password reset was successful")

    @error_boundary()
    async def resend_code(self, email: str, purpose: CodePurpose) -> JSONResponse:
        user = await self.user_service.find_by_email(email)
        if user is None:
            raise NotFoundError("User does not exist")

        if purpose == CodePurpose.VERIFICATION:
            code, code_expires = await self._new_code(self.user_service.find_by_verification_code)
            send = self.email_service.send_verification_code(user.email, user.name, code)
            update = {"verification_code": code, "verification_code_expires": code_expires}
        else:
            code, code_expires = await self._new_code(self.user_service.find_by_reset_code)
            send = self.email_service.send_forgot_password_email(user.email, user.name, code)
            update = {"reset_password_code": code, "reset_password_code_expires": code_expires}

        await self._notify(send, purpose.value, user.email)
        await self.user_service.update_user(user.id, update)

        return respond("Request was successful")

    @error_boundary()
    async def refresh_access_token(self, refresh_token: str) -> JSONResponse:
        payload = self.auth_service.verify_refresh_token(refresh_token)
        if payload is None:
            raise UnauthorizedError("Invalid refresh token")

        user = await self.user_service.find_by_email(payload.get("email", ""))
        if user is None or user.refresh_token != refresh_token:
            raise UnauthorizedError("Invalid refresh token")

        token = self.auth_service.generate_access_token(user.id, user.email)
        return respond("Token refreshed", {"token": token, "refreshToken": refresh_token})

    @error_boundary()
    async def google_authorization_url(self) -> JSONResponse:
        auth_data = self.google_oauth_service.generate_authorization_url()
        return respond("Request was successful", {
            "authorizationUrl": auth_data["authorization_url"],
            "state": auth_data["state"],
        })

    @error_boundary("Authentication failed")
    async def google_callback(self, code: str, state: str) -> JSONResponse:
        try:
            info = await self.google_oauth_service.exchange_code_for_user(code, state)
        except ValueError as e:
            logger.error(f"Google OAuth error: {e}")
            raise ValidationError(str(e))

        email = info.email.lower()
        user = await self.user_service.find_by_google_id(info.google_id)
        if user is None:
            user = await self.user_service.find_by_email(email)
            if user is not None:
                # Link the Google account to the existing email registration
                user = await self.user_service.update_user(user.id, {
                    "google_user_id": info.google_id,
                    "image": user.image or info.picture or None,
                })

        if user is None:
            user = await self.user_service.create_user({
                "name": info.name,
                "email": email,
                "google_user_id": info.google_id,
                "image": info.picture or None,
                "verified": True,
                "refresh_token": self.auth_service.generate_refresh_token(email),
            })
            logger.info(f"User registered with Google: {email} (ID: {user.id})")

        token = self.auth_service.generate_access_token(user.id, user.email)
        refresh_token = await self._current_refresh_token(user)

        return respond("Login was successful", self._auth_payload(user, token, refresh_token))
