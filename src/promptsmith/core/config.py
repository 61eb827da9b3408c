"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional
from functools import lru_cache


class HistorySettings(BaseSettings):
    """Variable usage history configuration."""

    max_items: int = Field(10, alias="PS_HISTORY_MAX_ITEMS")
    suggestion_limit: int = Field(5, alias="PS_SUGGESTION_LIMIT")
    storage_key: str = Field("variable-history", alias="PS_HISTORY_KEY")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class StorageSettings(BaseSettings):
    """Key-value storage configuration."""

    backend: str = Field("memory", alias="PS_STORAGE_BACKEND")  # "memory" or "file"
    path: str = Field("./.promptsmith", alias="PS_STORAGE_PATH")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class AdapterSettings(BaseSettings):
    """Context adaptation defaults applied by the template service."""

    default_model: Optional[str] = Field(None, alias="PS_DEFAULT_MODEL")
    default_format: Optional[str] = Field(None, alias="PS_DEFAULT_FORMAT")
    optimize_tokens: bool = Field(False, alias="PS_OPTIMIZE_TOKENS")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class ChainSettings(BaseSettings):
    """Chain execution configuration."""

    enforce_validation: bool = Field(False, alias="PS_CHAIN_ENFORCE_VALIDATION")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class TokenizerSettings(BaseSettings):
    """Token counting configuration."""

    default_tokenizer: str = Field("gpt-4", alias="PS_DEFAULT_TOKENIZER")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("WARNING", alias="PS_LOG_LEVEL")
    format: str = Field("text", alias="PS_LOG_FORMAT")  # "text" or "json"

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class Settings(BaseSettings):
    """Root configuration aggregating all settings."""

    history: HistorySettings = Field(default_factory=HistorySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    adapter: AdapterSettings = Field(default_factory=AdapterSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    tokenizer: TokenizerSettings = Field(default_factory=TokenizerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_file": ".env",
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
