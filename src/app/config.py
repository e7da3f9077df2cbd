"""Application configuration with structured settings groups."""
import logging
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


# =============================================================================
# Nested Settings Models
# =============================================================================


class EmailSettings(BaseModel):
    """
    Welcome email settings.

    The provider API key lives at the top level (RESEND_API_KEY) since it is
    the one secret injected at process start.
    """

    from_address: str = "onboarding@resend.dev"
    welcome_subject: str = "Welcome to Our Firm!"


class AuthSettings(BaseModel):
    """
    Session collaborator (Supabase Auth) settings.

    session_cookie: Cookie carrying the operator's access token.
    min_password_length: Minimum password length accepted on sign-up.
    """

    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str | None = None
    session_cookie: str = "access_token"
    min_password_length: int = 6


class IntakeSettings(BaseModel):
    """Intake form behaviour."""

    success_banner_seconds: float = 5.0


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Application settings with nested configuration groups.

    Environment variables use double underscore as delimiter for nested values.
    Example: AUTH__SUPABASE_URL=https://xyz.supabase.co, INTAKE__SUCCESS_BANNER_SECONDS=3
    """

    # Application metadata
    app_name: str = "Onboarding API"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Database
    database_url: str = "postgresql+asyncpg://localhost/onboarding"

    # Email provider secret
    resend_api_key: str | None = None

    # Nested settings groups
    email: EmailSettings = EmailSettings()
    auth: AuthSettings = AuthSettings()
    intake: IntakeSettings = IntakeSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def email_configured(self) -> bool:
        """Check if the email provider has its API key."""
        return bool(self.resend_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
