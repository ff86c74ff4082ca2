"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortalEntry(BaseModel):
    """One entry of the static job-portal catalog."""

    name: str
    category: str
    link: str
    description: str = ""


DEFAULT_JOB_PORTALS: list[PortalEntry] = [
    PortalEntry(
        name="Herkey",
        category="Tech",
        link="https://herkey.com",
        description="Career platform for women with jobs, mentorship and community",
    ),
    PortalEntry(
        name="LinkedIn Jobs",
        category="Professional",
        link="https://www.linkedin.com/jobs",
        description="Job listings from the world's largest professional network",
    ),
    PortalEntry(
        name="Indeed",
        category="Career",
        link="https://www.indeed.com",
        description="Job search engine aggregating listings from thousands of sites",
    ),
    PortalEntry(
        name="AngelList",
        category="Startup",
        link="https://wellfound.com",
        description="Startup jobs with salary and equity upfront",
    ),
    PortalEntry(
        name="Stack Overflow Jobs",
        category="Tech",
        link="https://stackoverflow.com/jobs",
        description="Developer jobs from the Stack Overflow community",
    ),
]


class Settings(BaseSettings):
    """Central settings – values come from .env or environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Chat completion (any OpenAI-compatible endpoint, Groq by default)
    llm_api_key: str = ""
    llm_model: str = "llama3-70b-8192"
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 800

    # JSearch (RapidAPI)
    jsearch_api_key: str = ""
    jsearch_host: str = "jsearch.p.rapidapi.com"
    jsearch_base_url: str = "https://jsearch.p.rapidapi.com"
    jsearch_country: str = "in"
    logo_lookup_url: str = "https://autocomplete.clearbit.com/v1/companies/suggest"

    # Reddit
    reddit_client_id: str = ""
    reddit_client_secret: str = ""
    reddit_user_agent: str = "CareerChat/1.0"

    # Link resolver
    favicon_service_url: str = "https://www.google.com/s2/favicons"
    favicon_size: int = 64
    placeholder_icon_url: str = "https://via.placeholder.com/50x50?text=C"

    # Static catalog rendered for /jobportals
    job_portals: list[PortalEntry] = DEFAULT_JOB_PORTALS

    # HTTP
    http_timeout: float = 15.0

    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    # "*" allows any origin without credentials; list origins to enable cookies
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached singleton settings instance."""
    return Settings()


def setup_logging() -> None:
    """Configure root logger based on settings."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
