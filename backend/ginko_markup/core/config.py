"""Application configuration and settings management."""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ginko_markup.rules import RULE_NAMES


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="GINKO_MARKUP_", extra="ignore")

    app_name: str = Field(default="Ginko Markup API", description="Human readable application name.")
    environment: Literal["local", "development", "staging", "production"] = Field(
        default="local",
        description="Deployment environment name.",
    )
    log_level: str = Field(default="INFO", description="Root logging level used by the API process.")
    host: str = Field(default="127.0.0.1", description="Interface the development server binds to.")
    port: int = Field(default=8000, description="Port the development server listens on.")
    max_nesting_depth: int = Field(
        default=64,
        ge=1,
        description="Deepest allowed nesting of blocks and dash elements before parsing fails.",
    )
    nested_fence_colons: bool = Field(
        default=False,
        description="Write outer blocks with one extra colon per nested level (MDC style).",
    )
    faq_id_length: int = Field(
        default=8,
        ge=4,
        le=24,
        description="Length of the random ids given to FAQ items.",
    )
    enabled_rules: List[str] = Field(
        default_factory=lambda: list(RULE_NAMES),
        description="Rewrite rules applied by the transformer, in their fixed order.",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


settings = get_settings()
