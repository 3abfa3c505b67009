"""
Google OAuth sign-in flow over plain HTTP calls.
"""
import logging
import secrets
import urllib.parse
from datetime import timedelta
from typing import Any, Dict, Optional

import httpx

from checkout_buddy.core.config import settings
from checkout_buddy.models.base import utcnow
from checkout_buddy.schemas.auth import GoogleUserInfo

logger = logging.getLogger(__name__)

STATE_LIFETIME = timedelta(minutes=10)


class GoogleOAuthService:
    """Service for handling the Google OAuth authorization-code flow."""

    # Google OAuth endpoints
    GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
    GOOGLE_USER_INFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport
        # Per-process state store; a multi-worker deployment needs a shared one
        self._state_codes: Dict[str, Dict[str, Any]] = {}

    def generate_authorization_url(self) -> Dict[str, str]:
        """
        Generate Google OAuth authorization URL.

        Returns:
            Dictionary with authorization URL and state code
        """
        self.cleanup_expired_states()

        # Generate a random state code for CSRF protection
        state = secrets.token_urlsafe(32)
        now = utcnow()
        self._state_codes[state] = {
            "created_at": now,
            "expires_at": now + STATE_LIFETIME,
        }

        params = {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "response_type": "code",
            "scope": settings.GOOGLE_SCOPES,
            "redirect_uri": settings.GOOGLE_REDIRECT_URI,
            "state": state,
            "access_type": "offline",
            "prompt": "consent",
        }

        auth_url = f"{self.GOOGLE_AUTH_URL}?{urllib.parse.urlencode(params)}"

        return {
            "authorization_url": auth_url,
            "state": state,
        }

    def consume_state(self, state: str) -> None:
        """
        Validate and discard a state code.

        Raises:
            ValueError: If the state is unknown or has expired
        """
        state_info = self._state_codes.pop(state, None)
        if state_info is None:
            raise ValueError("Invalid state parameter")
        if utcnow() > state_info["expires_at"]:
            raise ValueError("State parameter has expired")

    async def exchange_code_for_user(self, code: str, state: str) -> GoogleUserInfo:
        """
        Exchange an authorization code for the signed-in Google profile.

        Raises:
            ValueError: If state is invalid or any Google call fails
        """
        self.consume_state(state)

        token_data = {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "client_secret": settings.GOOGLE_CLIENT_SECRET,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": settings.GOOGLE_REDIRECT_URI,
        }
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.post(
                    self.GOOGLE_TOKEN_URL,
                    data=token_data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
                response.raise_for_status()
                token_response = response.json()
            except httpx.HTTPError as e:
                logger.error(f"Failed to exchange code for token: {e}")
                raise ValueError(f"Failed to exchange code for token: {e}")

        access_token = token_response.get("access_token")
        if not access_token:
            raise ValueError("No access token received from Google")

        return await self.get_user_info(access_token)

    async def get_user_info(self, access_token: str) -> GoogleUserInfo:
        """
        Get user information from Google using access token.

        Raises:
            ValueError: If user info request fails
        """
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.get(
                    self.GOOGLE_USER_INFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                response.raise_for_status()
                user_info = response.json()
            except httpx.HTTPError as e:
                logger.error(f"Failed to get user info from Google: {e}")
                raise ValueError(f"Failed to get user info from Google: {e}")

        if not user_info.get("id") or not user_info.get("email"):
            raise ValueError("Google profile is missing id or email")

        return GoogleUserInfo(
            google_id=user_info["id"],
            name=user_info.get("name") or user_info["email"].split("@")[0],
            email=user_info["email"],
            picture=user_info.get("picture", ""),
        )

    def cleanup_expired_states(self):
        """Clean up expired state codes."""
        now = utcnow()
        expired_states = [
            state for state, info in self._state_codes.items()
            if now > info["expires_at"]
        ]

        for state in expired_states:
            del self._state_codes[state]

        if expired_states:
            logger.info(f"Cleaned up {len(expired_states)} expired state codes")


google_oauth_service = GoogleOAuthService()
