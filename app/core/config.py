from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application configuration loaded from environment or .env."""

    app_name: str = Field(default="ArtisanAI Storytelling API")
    app_env: str = Field(default="dev", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS"
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    google_translate_api_key: Optional[SecretStr] = Field(
        default=None, alias="GOOGLE_TRANSLATE_API_KEY"
    )
    google_translate_endpoint: str = Field(
        default="https://translation.googleapis.com/language/translate/v2",
        alias="GOOGLE_TRANSLATE_ENDPOINT",
    )
    google_speech_api_key: Optional[SecretStr] = Field(
        default=None, alias="GOOGLE_SPEECH_API_KEY"
    )
    google_speech_endpoint: str = Field(
        default="https://speech.googleapis.com/v1/speech:recognize",
        alias="GOOGLE_SPEECH_ENDPOINT",
    )

    translation_batch_size: int = Field(default=5, alias="TRANSLATION_BATCH_SIZE")
    translation_batch_delay_ms: int = Field(default=100, alias="TRANSLATION_BATCH_DELAY_MS")
    translation_pacing: Literal["fixed", "token_bucket", "none"] = Field(
        default="fixed", alias="TRANSLATION_PACING"
    )
    translation_token_rate: float = Field(default=10.0, alias="TRANSLATION_TOKEN_RATE")
    translation_token_capacity: int = Field(default=1, alias="TRANSLATION_TOKEN_CAPACITY")
    translation_call_timeout: float = Field(default=30.0, alias="TRANSLATION_CALL_TIMEOUT")
    translation_character_quota: int = Field(
        default=10000, alias="TRANSLATION_CHARACTER_QUOTA"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def speech_api_key(self) -> Optional[SecretStr]:
        return self.google_speech_api_key or self.google_translate_api_key


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings."""
    return AppSettings()  # type: ignore[call-arg]
