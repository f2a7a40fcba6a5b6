from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process configuration, read once from the environment and an optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./notes.db",
        validation_alias=AliasChoices("URL_DATABASE", "DATABASE_URL"),
    )

    # Auth / JWT
    access_token_secret: str | None = None
    access_token_expire_minutes: int = 36000
    password_hashing: bool = False

    # Server
    port: int = 8000
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # Rate limiting
    rate_limit_enabled: bool = True
    limit_value_auth: str = "20/minute"
    limit_value_notes: str = "120/minute"


settings = Settings()
