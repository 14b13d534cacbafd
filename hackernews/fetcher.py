from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, Literal, Optional, TypeVar

import requests

from hackernews.cache import ResponseCache
from hackernews.errors import FetchError, HackerNewsError, PostParseError
from hackernews.http_client import HttpClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

Source = Literal["cached", "live"]
Completion = Callable[[Optional[T], Optional[HackerNewsError], bool], None]

DEFAULT_BASE_URL = "https://news.ycombinator.com/"
DEFAULT_API_BASE_URL = "https://hacker-news.firebaseio.com/v0/"


class APIEndpoint(str, Enum):
    TOP = "topstories"
    POST = "item"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    One delivery of a fetch.

    A request yields at most two of these: a `cached` one when the local
    cache holds the resource, then the authoritative `live` one.
    """

    value: Optional[T]
    error: Optional[HackerNewsError]
    source: Source

    @property
    def is_from_local_cache(self) -> bool:
        return self.source == "cached"

    @property
    def ok(self) -> bool:
        return self.error is None


def dispatch(results: Iterable[FetchResult[T]], completion: Completion) -> None:
    """Feed a result stream to a `(value, error, local)` callback, in order."""
    for result in results:
        completion(result.value, result.error, result.is_from_local_cache)


class Fetcher:
    """
    Retrieves raw payloads from the site or the JSON API and runs the
    caller's parsing transform on them.

    Parse failures (PostParseError) and transport failures (FetchError) are
    delivered as result errors, never raised to the caller.
    """

    def __init__(
        self,
        http: HttpClient,
        cache: Optional[ResponseCache] = None,
        base_url: str = DEFAULT_BASE_URL,
        api_base_url: str = DEFAULT_API_BASE_URL,
    ):
        self.http = http
        self.cache = cache
        self.base_url = base_url.rstrip("/") + "/"
        self.api_base_url = api_base_url.rstrip("/") + "/"

    # -------------------------
    # HTML endpoints
    # -------------------------

    def stream(self, path: str, parsing: Callable[[str], T]) -> Iterator[FetchResult[T]]:
        url = self.base_url + path.lstrip("/")
        return self._stream(url, parsing)

    def fetch(self, path: str, parsing: Callable[[str], T], completion: Completion) -> None:
        dispatch(self.stream(path, parsing), completion)

    # -------------------------
    # JSON endpoints
    # -------------------------

    def stream_json(
        self,
        endpoint: APIEndpoint,
        resource_id: Optional[str],
        parsing: Callable[[Any], T],
    ) -> Iterator[FetchResult[T]]:
        url = self.api_url(endpoint, resource_id)

        def transform(text: str) -> T:
            return parsing(_decode_json(text, url))

        return self._stream(url, transform)

    def fetch_json(
        self,
        endpoint: APIEndpoint,
        resource_id: Optional[str],
        parsing: Callable[[Any], T],
        completion: Completion,
    ) -> None:
        dispatch(self.stream_json(endpoint, resource_id, parsing), completion)

    def api_url(self, endpoint: APIEndpoint, resource_id: Optional[str] = None) -> str:
        if resource_id is None:
            return f"{self.api_base_url}{endpoint.value}.json"
        return f"{self.api_base_url}{endpoint.value}/{resource_id}.json"

    # -------------------------
    # Helpers
    # -------------------------

    def _stream(self, url: str, transform: Callable[[str], T]) -> Iterator[FetchResult[T]]:
        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                result = _apply(transform, cached, "cached", url)
                if result.ok:
                    yield result
                else:
                    logger.warning("Ignoring unparsable cache entry: url=%s err=%s", url, result.error)

        logger.info("Fetching: url=%s", url)
        try:
            text = self.http.get_text(url)
        except requests.RequestException as e:
            err = FetchError(f"Request failed: {e}", url=url)
            err.__cause__ = e
            yield FetchResult(value=None, error=err, source="live")
            return

        result = _apply(transform, text, "live", url)
        if result.ok and self.cache is not None:
            self.cache.put(url, text)
        yield result


def _apply(transform: Callable[[str], T], text: str, source: Source, url: str) -> FetchResult[T]:
    try:
        return FetchResult(value=transform(text), error=None, source=source)
    except PostParseError as e:
        logger.warning("Parse failed: url=%s source=%s err=%s", url, source, e)
        return FetchResult(value=None, error=e, source=source)


def _decode_json(text: str, url: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise PostParseError(f"Invalid JSON from {url}: {e}") from e
