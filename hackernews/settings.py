from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hackernews.models import PostFilter


class HackerNewsSettings(BaseSettings):
    """
    Environment-driven settings for the site/API fetchers.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ---- Endpoints ----
    base_url: str = Field(default="https://news.ycombinator.com/", alias="HN_BASE_URL")
    api_base_url: str = Field(
        default="https://hacker-news.firebaseio.com/v0/",
        alias="HN_API_BASE_URL",
    )

    # ---- HTTP ----
    request_timeout_sec: float = Field(default=15.0, alias="HN_REQUEST_TIMEOUT_SEC")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        alias="HN_USER_AGENT",
    )

    # ---- Local cache ----
    cache_enabled: bool = Field(default=True, alias="HN_CACHE_ENABLED")
    # Unset -> bounded in-memory cache
    cache_dir: Optional[str] = Field(default=None, alias="HN_CACHE_DIR")
    memory_cache_max_entries: int = Field(default=512, gt=0, alias="HN_MEMORY_CACHE_MAX_ENTRIES")

    # ---- Listing ----
    # "" (front page) | newest | ask | show | jobs | best
    listing_filter: PostFilter = Field(default=PostFilter.TOP, alias="HN_LISTING_FILTER")
    listing_page: int = Field(default=1, alias="HN_LISTING_PAGE")

    # ---- JSON API ----
    max_api_items: int = Field(default=10, alias="HN_MAX_API_ITEMS")

    dump_html_on_empty: bool = Field(default=True, alias="HN_DUMP_HTML_ON_EMPTY")
    dump_html_path: str = Field(default="debug_listing.html", alias="HN_DUMP_HTML_PATH")


def load_settings() -> HackerNewsSettings:
    return HackerNewsSettings()
