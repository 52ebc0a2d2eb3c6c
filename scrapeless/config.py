from typing import Optional
import logging
import os

from pydantic import BaseModel, Field

from .errors import MissingEnvironmentError, ScrapelessError

logger = logging.getLogger(__name__)

# Scrapeless api client
SCRAPELESS_BASE_API_URL = "SCRAPELESS_BASE_API_URL"
SCRAPELESS_ACTOR_API_URL = "SCRAPELESS_ACTOR_API_URL"
SCRAPELESS_STORAGE_API_URL = "SCRAPELESS_STORAGE_API_URL"
SCRAPELESS_BROWSER_API_URL = "SCRAPELESS_BROWSER_API_URL"
SCRAPELESS_CRAWL_API_URL = "SCRAPELESS_CRAWL_API_URL"
SCRAPELESS_API_KEY = "SCRAPELESS_API_KEY"
SCRAPELESS_USER_ID = "SCRAPELESS_USER_ID"
SCRAPELESS_TEAM_ID = "SCRAPELESS_TEAM_ID"

# Actor runtime
SCRAPELESS_ACTOR_ID = "SCRAPELESS_ACTOR_ID"
SCRAPELESS_RUN_ID = "SCRAPELESS_RUN_ID"
SCRAPELESS_INPUT = "SCRAPELESS_INPUT"

# Actor storage
SCRAPELESS_DATASET_ID = "SCRAPELESS_DATASET_ID"
SCRAPELESS_KV_NAMESPACE_ID = "SCRAPELESS_KV_NAMESPACE_ID"
SCRAPELESS_BUCKET_ID = "SCRAPELESS_BUCKET_ID"
SCRAPELESS_QUEUE_ID = "SCRAPELESS_QUEUE_ID"

ENV_KEYS = [
    SCRAPELESS_BASE_API_URL,
    SCRAPELESS_ACTOR_API_URL,
    SCRAPELESS_STORAGE_API_URL,
    SCRAPELESS_BROWSER_API_URL,
    SCRAPELESS_CRAWL_API_URL,
    SCRAPELESS_API_KEY,
    SCRAPELESS_USER_ID,
    SCRAPELESS_TEAM_ID,
    SCRAPELESS_ACTOR_ID,
    SCRAPELESS_RUN_ID,
    SCRAPELESS_INPUT,
    SCRAPELESS_DATASET_ID,
    SCRAPELESS_KV_NAMESPACE_ID,
    SCRAPELESS_BUCKET_ID,
    SCRAPELESS_QUEUE_ID,
]

DEFAULT_BASE_API_URL = "https://api.scrapeless.com"
DEFAULT_ACTOR_API_URL = "https://actor.scrapeless.com"
DEFAULT_STORAGE_API_URL = "https://storage.scrapeless.com"
DEFAULT_BROWSER_API_URL = "https://browser.scrapeless.com"
DEFAULT_CRAWL_API_URL = "https://api.scrapeless.com"
DEFAULT_TIMEOUT = 30.0


def get_env(key: str) -> str:
    """Return the value of a required environment variable."""
    value = os.getenv(key)
    if value is None:
        raise MissingEnvironmentError(key)
    return value


def get_env_with_default(key: str, default: str) -> str:
    value = os.getenv(key)
    return default if value is None else value


def print_env():
    """Log every known Scrapeless environment variable at debug level"""
    for key in ENV_KEYS:
        value = os.getenv(key)
        if key == SCRAPELESS_API_KEY and value:
            value = value[:4] + "***"
        logger.debug(f"{key}: {value}")


class ScrapelessConfig(BaseModel):
    """Client configuration. Unset fields fall back to environment variables."""

    api_key: Optional[str] = Field(None, description="Scrapeless API key")
    base_api_url: Optional[str] = Field(None, description="Scraping, captcha and proxy API")
    actor_api_url: Optional[str] = Field(None, description="Actor API")
    storage_api_url: Optional[str] = Field(None, description="Storage API")
    browser_api_url: Optional[str] = Field(None, description="Scraping browser API")
    scraping_crawl_api_url: Optional[str] = Field(None, description="Scrape/crawl/extract API")
    timeout: Optional[float] = Field(None, description="Request timeout in seconds")

    def resolve(self) -> "ScrapelessConfig":
        """Return a copy with every field populated, raising when no API key is available."""
        api_key = self.api_key or os.getenv(SCRAPELESS_API_KEY)
        if not api_key:
            raise ScrapelessError(
                "API key is required - either pass it in config or set SCRAPELESS_API_KEY environment variable"
            )
        return ScrapelessConfig(
            api_key=api_key,
            base_api_url=self.base_api_url or get_env_with_default(SCRAPELESS_BASE_API_URL, DEFAULT_BASE_API_URL),
            actor_api_url=self.actor_api_url or get_env_with_default(SCRAPELESS_ACTOR_API_URL, DEFAULT_ACTOR_API_URL),
            storage_api_url=self.storage_api_url
            or get_env_with_default(SCRAPELESS_STORAGE_API_URL, DEFAULT_STORAGE_API_URL),
            browser_api_url=self.browser_api_url
            or get_env_with_default(SCRAPELESS_BROWSER_API_URL, DEFAULT_BROWSER_API_URL),
            scraping_crawl_api_url=self.scraping_crawl_api_url
            or get_env_with_default(SCRAPELESS_CRAWL_API_URL, DEFAULT_CRAWL_API_URL),
            timeout=self.timeout or DEFAULT_TIMEOUT,
        )
