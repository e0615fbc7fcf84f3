from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database configuration
    DATABASE_URL: str | None = None

    # Token verification: JWT_SECRET (HS256) for development, Supabase JWKS otherwise
    JWT_SECRET: str | None = None
    SUPABASE_URL: str | None = None
    ADMIN_ROLE_CLAIM: str = "role"  # Key in app_metadata holding the global role

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # "json" or "console"
    AUDIT_ALLOWED_DECISIONS: bool = False  # Also audit allows, at DEBUG

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
