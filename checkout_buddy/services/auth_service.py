import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from jose import jwt
from passlib.context import CryptContext

from checkout_buddy.core.config import settings
from checkout_buddy.models.base import utcnow

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class AuthService:
    """Password hashing, signed credentials and one-time codes."""

    @staticmethod
    def hash_password(password: str) -> str:
        # Truncate password to 72 bytes to avoid bcrypt limitation
        password = password.encode('utf-8')[:72].decode('utf-8', errors='ignore')
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        # Truncate password to 72 bytes to match hash_password behavior
        plain_password = plain_password.encode('utf-8')[:72].decode('utf-8', errors='ignore')
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def generate_code(now: Optional[datetime] = None) -> Tuple[str, datetime]:
        """Return a random 4-digit code in [1000, 9999] and its expiry."""
        now = now or utcnow()
        code = str(1000 + secrets.randbelow(9000))
        return code, now + timedelta(minutes=settings.CODE_EXPIRY_MINUTES)

    @staticmethod
    def generate_access_token(user_id: str, email: str) -> str:
        now = utcnow()
        payload = {
            "sub": user_id,
            "email": email,
            "type": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": now + timedelta(hours=settings.ACCESS_TOKEN_EXPIRY_HOURS),
        }
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def generate_refresh_token(email: str) -> str:
        now = utcnow()
        payload = {
            "email": email,
            "type": REFRESH_TOKEN_TYPE,
            "iat": now,
            "exp": now + timedelta(days=settings.REFRESH_TOKEN_EXPIRY_DAYS),
        }
        return jwt.encode(payload, settings.JWT_REFRESH_SECRET, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify_access_token(token: str) -> Optional[dict]:
        """
        Verify and decode an access token.

        Args:
            token: JWT token string

        Returns:
            The claims if the signature and expiry are valid, None otherwise
        """
        try:
            payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.warning("Access token has expired")
            return None
        except jwt.JWTError as e:
            logger.warning(f"Access token verification failed: {e}")
            return None
        if payload.get("type") != ACCESS_TOKEN_TYPE or not payload.get("sub"):
            return None
        return payload

    @staticmethod
    def verify_refresh_token(token: Optional[str]) -> Optional[dict]:
        if not token:
            return None
        try:
            payload = jwt.decode(token, settings.JWT_REFRESH_SECRET, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.info("Refresh token has expired")
            return None
        except jwt.JWTError as e:
            logger.warning(f"Refresh token verification failed: {e}")
            return None
        if payload.get("type") != REFRESH_TOKEN_TYPE:
            return None
        return payload

    def is_refresh_token_valid(self, token: Optional[str]) -> bool:
        return self.verify_refresh_token(token) is not None
