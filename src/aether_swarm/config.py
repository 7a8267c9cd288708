"""centralized configuration management using pydantic settings.

this module provides type-safe, validated configuration for the swarm.
configuration is loaded from environment variables and optional .env files.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """main settings class for the swarm.

    configuration is loaded from environment variables. a .env file in the
    working directory is also loaded if present.

    attributes:
        google_api_key: api key for google (gemini)
        anthropic_api_key: api key for anthropic (claude)
        llm_provider: explicit provider selection (auto-detected if not set)
        llm_model: model to use (provider default if not set)
        log_level: logging level (DEBUG, INFO, WARNING, ERROR)
        max_attempts: total attempts for a failing model call
        retry_base_delay: first backoff delay in seconds, doubled per attempt
        retry_max_delay: upper bound for a single backoff delay
        max_rate_limit_waits: server-suggested waits honoured per model call
        call_timeout: deadline in seconds for a top-level call (none = no deadline)
        name_seed: seed for the name pool shuffle (random if not set)
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
    anthropic_api_key: str | None = None

    # llm configuration
    llm_provider: str | None = Field(default=None, alias="LLM_PROVIDER")
    llm_model: str | None = Field(default=None, alias="LLM_MODEL")

    # swarm configuration
    log_level: str = Field(default="WARNING", alias="AETHER_SWARM_LOG_LEVEL")
    max_attempts: int = Field(default=3, ge=1, alias="SWARM_MAX_ATTEMPTS")
    retry_base_delay: float = Field(default=1.0, ge=0, alias="SWARM_RETRY_BASE_DELAY")
    retry_max_delay: float = Field(default=60.0, ge=0, alias="SWARM_RETRY_MAX_DELAY")
    max_rate_limit_waits: int = Field(default=5, ge=0, alias="SWARM_MAX_RATE_LIMIT_WAITS")
    call_timeout: float | None = Field(default=None, gt=0, alias="SWARM_CALL_TIMEOUT")
    name_seed: int | None = Field(default=None, alias="SWARM_NAME_SEED")

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
        if self.anthropic_api_key:
            return "anthropic"

        return None

    def get_api_key_for_provider(self, provider: str) -> str | None:
        """get the api key for a specific provider.

        args:
            provider: provider name (google, anthropic)

        returns:
            api key or None if not set
        """
        key_map = {
            "google": self.get_google_api_key(),
            "anthropic": self.anthropic_api_key,
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
