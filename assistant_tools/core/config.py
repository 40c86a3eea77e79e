from typing import Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PERPLEXITY_CHAT_COMPLETIONS_URL = "https://api.perplexity.ai/chat/completions"
PERPLEXITY_DEFAULT_MODEL = "llama-3.1-sonar-small-128k-online"
PERPLEXITY_DEFAULT_SYSTEM_PROMPT = "Be precise and concise."


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Project Information
    PROJECT_NAME: str = "Assistant Tool-Call Service"
    VERSION: str = "0.1.0"

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3000

    # Database
    SQLALCHEMY_DATABASE_URI: str = Field(
        default="sqlite:///./reminders.db",
        validation_alias=AliasChoices("SQLALCHEMY_DATABASE_URI", "DATABASE_URL"),
    )

    # Perplexity (question forwarding)
    PERPLEXITY_API_KEY: Optional[str] = None
    PERPLEXITY_API_URL: str = PERPLEXITY_CHAT_COMPLETIONS_URL
    PERPLEXITY_MODEL: str = PERPLEXITY_DEFAULT_MODEL
    PERPLEXITY_SYSTEM_PROMPT: str = PERPLEXITY_DEFAULT_SYSTEM_PROMPT
    PERPLEXITY_TIMEOUT: Optional[float] = None  # seconds; None waits indefinitely

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_REQUEST_BODIES: bool = True

    # Metrics
    METRICS_ENABLED: bool = False

    @field_validator("PERPLEXITY_API_KEY", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        # An empty env var must not count as a configured credential
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()
