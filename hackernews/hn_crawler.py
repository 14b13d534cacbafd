from __future__ import annotations

import logging
from typing import Any, Iterator, Optional
from urllib.parse import quote

from hackernews.cache import DiskResponseCache, MemoryResponseCache, ResponseCache
from hackernews.errors import PostParseError
from hackernews.fetcher import APIEndpoint, Fetcher, FetchResult
from hackernews.http_client import HttpClient, HttpConfig
from hackernews.models import Post, PostFilter
from hackernews.post_parser import parse_collection_html, parse_post_json
from hackernews.settings import HackerNewsSettings

logger = logging.getLogger(__name__)


class HackerNewsCrawler:
    """
    Fetch orchestration for news.ycombinator.com and the Firebase API.

    Scope:
    - Listing pages: https://news.ycombinator.com/<filter>?p=<page>
    - User submissions: https://news.ycombinator.com/submitted?id=<user>
    - Top story ids: <api>/topstories.json
    - Items: <api>/item/<id>.json

    Every fetch returns an iterator of FetchResult: an optional `cached`
    result followed by the `live` one. Results are produced lazily, so the
    network request happens only once the cached result has been consumed.
    """

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher

    @classmethod
    def from_settings(cls, s: HackerNewsSettings) -> "HackerNewsCrawler":
        http = HttpClient(HttpConfig(timeout_sec=s.request_timeout_sec, user_agent=s.user_agent))

        cache: Optional[ResponseCache] = None
        if s.cache_enabled:
            if s.cache_dir:
                cache = DiskResponseCache(s.cache_dir)
            else:
                cache = MemoryResponseCache(max_entries=s.memory_cache_max_entries)

        fetcher = Fetcher(http, cache=cache, base_url=s.base_url, api_base_url=s.api_base_url)
        return cls(fetcher)

    # -------------------------
    # HTML listings
    # -------------------------

    def fetch_listing(self, post_filter: PostFilter, page: int = 1) -> Iterator[FetchResult[list[Post]]]:
        path = self.listing_path(post_filter, page)
        logger.info("Fetching listing: filter=%r page=%s", post_filter.value, page)
        return self.fetcher.stream(path, parse_collection_html)

    def fetch_user_posts(
        self,
        username: str,
        page: int = 1,
        last_post_id: Optional[str] = None,
    ) -> Iterator[FetchResult[list[Post]]]:
        """
        Fetch a user's submissions.

        Pagination is cursor based: pass the post_id of the last post of the
        previous page. `page` is informational only.
        """
        path = self.user_posts_path(username, last_post_id)
        logger.info("Fetching user posts: user=%s page=%s last_post_id=%s", username, page, last_post_id)
        return self.fetcher.stream(path, parse_collection_html)

    def fetch_listing_html(self, post_filter: PostFilter, page: int = 1) -> str:
        """Fetch raw listing HTML, bypassing the cache (useful for debugging DOM changes)."""
        return self.fetcher.http.get_text(self.fetcher.base_url + self.listing_path(post_filter, page))

    @staticmethod
    def listing_path(post_filter: PostFilter, page: int) -> str:
        return f"{post_filter.value}?p={page}"

    @staticmethod
    def user_posts_path(username: str, last_post_id: Optional[str] = None) -> str:
        path = "submitted?id=" + quote(username, safe="")
        cursor = _to_int(last_post_id)
        if cursor is not None:
            # Next page starts just before the last id already seen.
            path += f"&next={cursor - 1}"
        return path

    # -------------------------
    # JSON API
    # -------------------------

    def fetch_top_ids(self) -> Iterator[FetchResult[list[int]]]:
        return self.fetcher.stream_json(APIEndpoint.TOP, None, _parse_id_list)

    def fetch_post_by_id(self, item_id: int) -> Iterator[FetchResult[Post]]:
        return self.fetcher.stream_json(APIEndpoint.POST, str(item_id), parse_post_json)


def _parse_id_list(payload: Any) -> list[int]:
    if not isinstance(payload, list):
        raise PostParseError(f"Expected a list of ids, got {type(payload).__name__}")
    ids = [i for i in payload if isinstance(i, int) and not isinstance(i, bool)]
    if len(ids) != len(payload):
        raise PostParseError("Id list contains non-integer entries")
    return ids


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
