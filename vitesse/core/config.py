"""Client configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the package.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Backend
    VITESSE_API_URL: str = "http://127.0.0.1:8080"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Token persistence
    TOKEN_STORE_PATH: str = "~/.vitesse/token.json"
    TOKEN_KEY: str = "authToken"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
