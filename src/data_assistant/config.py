"""centralized configuration management using pydantic settings.

this module provides type-safe, validated configuration for the data assistant.
configuration is loaded from environment variables and optional .env files.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """main settings class for the data assistant.

    configuration is loaded from environment variables. a .env file in the
    working directory is also loaded if present.

    attributes:
        google_api_key: api key for google (gemini)
        openai_api_key: api key for openai
        llm_provider: explicit provider selection (auto-detected if not set)
        llm_model: model to use (provider default if not set)
        log_level: logging level (DEBUG, INFO, WARNING, ERROR)
        max_agent_rounds: model calls allowed per user turn
        categorization_batch_size: default number of values per categorization chunk
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # api keys for llm providers
    google_api_key: str | None = None
    gemini_api_key: str | None = None  # alias for google
    openai_api_key: str | None = None

    # llm configuration
    llm_provider: str | None = Field(default=None, alias="LLM_PROVIDER")
    llm_model: str | None = Field(default=None, alias="LLM_MODEL")

    # assistant configuration
    log_level: str = Field(default="WARNING", alias="DATA_ASSISTANT_LOG_LEVEL")
    max_agent_rounds: int = Field(default=10, ge=1)
    categorization_batch_size: int = Field(default=100, ge=1)

    def get_google_api_key(self) -> str | None:
        """get google api key, checking both GOOGLE_API_KEY and GEMINI_API_KEY."""
        return self.google_api_key or self.gemini_api_key

    def detect_provider(self) -> str | None:
        """auto-detect provider based on available api keys.

        returns:
            provider name or None if no keys are set
        """
        if self.llm_provider:
            return self.llm_provider

        if self.get_google_api_key():
            return "google"
        if self.openai_api_key:
            return "openai"

        return None

    def get_api_key_for_provider(self, provider: str) -> str | None:
        """get the api key for a specific provider.

        args:
            provider: provider name (google, openai)

        returns:
            api key or None if not set
        """
        key_map = {
            "google": self.get_google_api_key(),
            "openai": self.openai_api_key,
        }
        return key_map.get(provider)


@lru_cache
def get_settings() -> Settings:
    """get the singleton settings instance.

    uses lru_cache to ensure only one instance is created.
    call get_settings.cache_clear() to reload settings if needed.

    returns:
        the settings instance
    """
    return Settings()
