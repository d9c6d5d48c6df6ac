"""
Unified settings

Type-safe configuration with pydantic-settings
- Loaded from environment variables (and .env)
- Validated, with defaults
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AISettings(BaseSettings):
    """LLM provider settings"""

    model_config = SettingsConfigDict(env_prefix="", populate_by_name=True)

    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY", description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o", alias="OPENAI_MODEL", description="OpenAI model")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", alias="OPENAI_BASE_URL", description="OpenAI API base URL"
    )
    max_tokens: int = Field(default=500, alias="OPENAI_MAX_TOKENS")
    temperature: float = Field(default=0.8, alias="OPENAI_TEMPERATURE")
    presence_penalty: float = Field(default=0.1, alias="OPENAI_PRESENCE_PENALTY")
    frequency_penalty: float = Field(default=0.1, alias="OPENAI_FREQUENCY_PENALTY")
    request_timeout: float = Field(default=20.0, alias="OPENAI_TIMEOUT", description="Upstream timeout (seconds)")

    @property
    def is_configured(self) -> bool:
        return bool(self.openai_api_key)


class CompanionSettings(BaseSettings):
    """Chat session behaviour"""

    model_config = SettingsConfigDict(env_prefix="GALBF_")

    pacing_enabled: bool = Field(default=True, description="Delay local replies to feel natural")
    reply_timeout: float = Field(default=25.0, description="Bound on one external reply (seconds)")
    proxy_url: str = Field(default="", description="Chat proxy base URL for the CLI")
    autosave_interval: float = Field(default=30.0, description="Preference autosave period (seconds)")
    history_window: int = Field(default=10, description="Turns forwarded to the reply handler")
    analysis_window: int = Field(default=5, description="Analyses kept per session")
    validation_length_threshold: int = Field(default=50)

    @field_validator("history_window", "analysis_window")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError("window must be at least 1")
        return v


class GalBestfriendSettings(BaseSettings):
    """Top-level settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: str = Field(default="data", alias="GALBF_DATA_DIR", description="Preference store directory")
    debug: bool = Field(default=False, alias="GALBF_DEBUG")
    log_level: str = Field(default="INFO", alias="GALBF_LOG_LEVEL")

    ai: AISettings = Field(default_factory=AISettings)
    companion: CompanionSettings = Field(default_factory=CompanionSettings)

    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")

    @classmethod
    def load(cls) -> "GalBestfriendSettings":
        """Load settings including the sub-groups"""
        return cls(
            ai=AISettings(),
            companion=CompanionSettings(),
        )


@lru_cache()
def get_settings() -> GalBestfriendSettings:
    """
    Cached settings

    Example:
        settings = get_settings()
        print(settings.ai.openai_model)
    """
    return GalBestfriendSettings.load()


def reload_settings() -> GalBestfriendSettings:
    """Reload settings"""
    get_settings.cache_clear()
    return get_settings()
