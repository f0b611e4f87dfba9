"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # NapCat (OneBot v11 HTTP API)
    napcat_url: str = ""
    napcat_access_token: str = ""
    napcat_timeout_seconds: float = 10.0
    qq_group_id: str = ""

    # Webhook security
    webhook_token: str = ""  # Generated per process when empty

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 3000

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def missing_required(self) -> list[str]:
        """Return the names of required variables that are unset or blank."""
        required = {
            "NAPCAT_URL": self.napcat_url,
            "QQ_GROUP_ID": self.qq_group_id,
        }
        return [name for name, value in required.items() if not value.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
