"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        jwt_secret: Secret used to sign bearer tokens (required, no default)
        jwt_algorithm: Algorithm used for JWT encoding
        access_token_expire_minutes: Access token lifetime in minutes (24h)
        refresh_token_expire_minutes: Long-lived token lifetime in minutes (7d)

        lockout_threshold: Failed logins before the account gets locked
        lockout_minutes: How long a lock lasts

        cache_ttl_seconds: Default time-to-live of cached read responses

        login_rate_limit: Login requests allowed per client per window
        login_rate_window_seconds: Length of the login rate-limit window

        database_url: SQLAlchemy connection string
        bcrypt_rounds: bcrypt cost factor used for password hashes

        # Bootstrap admin settings (optional)
        admin_username: Username of the bootstrap administrator
        admin_initial_password: Password for the bootstrap administrator
    """
    # JWT settings
    jwt_secret: str = Field(..., min_length=1)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60
    refresh_token_expire_minutes: int = 7 * 24 * 60

    # Account lockout
    lockout_threshold: int = 5
    lockout_minutes: int = 60

    # Response cache
    cache_ttl_seconds: int = 300

    # Login rate limiting
    login_rate_limit: int = 10
    login_rate_window_seconds: int = 15 * 60

    # Database settings
    database_url: str = "sqlite:///./salon.db"
    bcrypt_rounds: int = 10

    # Frontend settings
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Bootstrap admin settings (optional - only used for first admin creation)
    admin_username: str = "admin"
    admin_initial_password: Optional[str] = None

    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False


# Create settings instance
settings = Settings()
