import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class Settings:
    PROJECT_NAME: str = "Check Out Buddy"
    API_PREFIX: str = "/api"
    VERSION: str = "1.0.0"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    RUN_MIGRATIONS: bool = os.getenv("RUN_MIGRATIONS", "true").lower() in ("true", "1", "yes")

    # Database, DATABASE_URL wins over the individual components
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", "checkout_buddy")
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "password")

    # JWT configuration
    JWT_SECRET: str = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
    JWT_REFRESH_SECRET: str = os.getenv("JWT_REFRESH_SECRET", "your-refresh-secret-change-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRY_HOURS: int = int(os.getenv("ACCESS_TOKEN_EXPIRY_HOURS", "5"))
    REFRESH_TOKEN_EXPIRY_DAYS: int = int(os.getenv("REFRESH_TOKEN_EXPIRY_DAYS", "7"))

    # One-time codes (email verification and password reset)
    CODE_EXPIRY_MINUTES: int = 60

    # Mail (Resend)
    RESEND_API_KEY: str = os.getenv("RESEND_API_KEY", "")
    MAIL_FROM_ADDRESS: str = os.getenv("MAIL_FROM_ADDRESS", "noreply@checkoutbuddy.app")
    MAIL_FROM_NAME: str = os.getenv("MAIL_FROM_NAME", "Check Out Buddy")

    # Payments
    STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY", "")

    # Product lookup
    OPEN_FOOD_FACTS_URL: str = "https://world.openfoodfacts.net/api/v2/product"
    RAPID_API_KEY: str = os.getenv("X_RAPID_API_KEY", "")
    RAPID_API_HOST: str = "real-time-amazon-data.p.rapidapi.com"
    PRODUCT_SEARCH_COUNTRY: str = os.getenv("PRODUCT_SEARCH_COUNTRY", "GB")

    # Google Places
    PLACES_API_KEY: str = os.getenv("PLACES_URL_API_KEY", "")
    PLACES_SEARCH_RADIUS: int = int(os.getenv("PLACES_SEARCH_RADIUS", "30000"))
    PRICE_VARIANCE_PERCENTAGE: float = 10.0

    # Google OAuth configuration
    GOOGLE_CLIENT_ID: str = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET: str = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REDIRECT_URI: str = os.getenv("GOOGLE_REDIRECT_URI", "http://localhost:3000/api/auth/google/callback")
    GOOGLE_SCOPES: str = "openid email profile"

    @property
    def async_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


# Global settings instance
settings = Settings()
