"""Configuration management for the Proposal Generator."""

import re
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ===========================================
    # OpenAI Configuration (for CrewAI)
    # ===========================================
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")
    OPENAI_MODEL: str = Field(default="gpt-4o", description="Model for the extraction agent")
    EXTRACTION_MAX_TOKENS: int = Field(default=4000, description="Completion token limit")

    # ===========================================
    # Access Gate
    # ===========================================
    ACCESS_PASSWORD: str = Field(default="", description="Shared login password")
    TOKEN_SECRET: str = Field(default="", description="Secret used to sign access tokens")
    TOKEN_SECRET_PREVIOUS: str = Field(
        default="",
        description="Previous signing secret, still accepted during rotation"
    )
    TOKEN_TTL_HOURS: int = Field(default=24, description="Access token lifetime")
    TOKEN_ALGORITHM: str = Field(default="HS256", description="JWT signing algorithm")

    # ===========================================
    # Notion CRM Configuration
    # ===========================================
    NOTION_API_KEY: str = Field(default="", description="Notion integration token")
    NOTION_CRM_DATABASE_ID: str = Field(
        default="1ff74c26-672f-8081-91b3-f71f280e06c8",
        description="Notion database holding CRM entries"
    )
    NOTION_VERSION: str = Field(default="2022-06-28", description="Notion API version")

    # ===========================================
    # YouTube Feed Configuration
    # ===========================================
    YOUTUBE_FEED_URL: str = Field(
        default="https://www.youtube.com/feeds/videos.xml",
        description="YouTube channel RSS endpoint"
    )
    HTTP_TIMEOUT: float = Field(default=30.0, description="Outbound HTTP timeout in seconds")

    # ===========================================
    # Output & Rendering
    # ===========================================
    OUTPUT_DIR: str = Field(default="./output", description="Directory for generated proposals")
    SETTINGS_PATH: str = Field(default="./settings.json", description="Business settings file")
    LOGO_PATH: str = Field(default="./logo.jpg", description="Logo placed at the top of PDFs")
    RENDER_MODE: str = Field(
        default="pdf",
        description="generate-pdf response: 'pdf' file or 'markdown' JSON"
    )

    # ===========================================
    # Server Configuration
    # ===========================================
    DEBUG: bool = Field(default=False, description="Debug mode")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Credentials the service cannot start without
REQUIRED_CREDENTIALS = ("OPENAI_API_KEY", "ACCESS_PASSWORD", "TOKEN_SECRET")


def missing_credentials(settings: Settings) -> List[str]:
    """Names of required credentials that are unset."""
    return [name for name in REQUIRED_CREDENTIALS if not getattr(settings, name)]


def slugify(name: str) -> str:
    """
    Make a filesystem-safe identifier from a client name.

    Every non-alphanumeric character becomes a dash and the result is
    lower-cased, e.g. "Sunrise Bakery" -> "sunrise-bakery".
    """
    return re.sub(r"[^a-zA-Z0-9]", "-", name or "proposal").lower()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
