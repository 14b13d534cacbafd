from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import urlparse


class PostFilter(str, Enum):
    """Listing category. The value is the site path of the listing."""

    TOP = ""
    DEFAULT = "default"
    ASK = "ask"
    NEW = "newest"
    JOBS = "jobs"
    BEST = "best"
    SHOW = "show"


# Keys of the persisted record, in encode order.
RECORD_KEYS = (
    "title",
    "username",
    "url",
    "points",
    "commentsCount",
    "postId",
    "prettyTime",
    "upvoteURL",
)

_RECORD_ATTRS = {
    "title": "title",
    "username": "username",
    "url": "url",
    "points": "points",
    "commentsCount": "comments_count",
    "postId": "post_id",
    "prettyTime": "pretty_time",
    "upvoteURL": "upvote_url",
}


@dataclass(eq=False)
class Post:
    """
    One story/listing item.

    Built either from an HTML listing fragment (post_id, pretty_time, points)
    or from a JSON API item (id, kids, score, time). Fields of the other
    origin stay at their defaults.
    """

    id: Optional[int] = None
    title: Optional[str] = None
    username: Optional[str] = None
    url: Optional[str] = None
    points: int = 0
    comments_count: int = 0
    post_id: Optional[str] = None
    pretty_time: Optional[str] = None
    upvote_url: Optional[str] = None
    type: Optional[PostFilter] = None
    kids: Optional[list[int]] = None
    score: Optional[int] = None
    time: Optional[int] = None
    dead: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Post):
            return NotImplemented
        # Same site item; posts without an item id never compare equal.
        return self.post_id is not None and self.post_id == other.post_id

    @property
    def domain(self) -> str:
        if not self.url:
            return ""
        try:
            host = urlparse(self.url).hostname
        except ValueError:
            return ""
        if not host:
            return ""
        if host.startswith("www"):
            return host[4:]
        return host

    @classmethod
    def from_html(cls, fragment: str) -> "Post":
        from hackernews.post_parser import parse_post_html

        return parse_post_html(fragment)

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Post":
        """
        Raises:
            PostParseError: if the item has no usable url.
        """
        from hackernews.post_parser import parse_post_json

        return parse_post_json(obj)

    # -------------------------
    # Persisted record
    # -------------------------

    def to_record(self) -> dict[str, Any]:
        """Flat key/value form for local caching. None values are left out."""
        record: dict[str, Any] = {}
        for key in RECORD_KEYS:
            value = getattr(self, _RECORD_ATTRS[key])
            if value is not None:
                record[key] = value
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Post":
        post = cls()
        for key in RECORD_KEYS:
            if key not in record or record[key] is None:
                continue
            value = record[key]
            if key in ("points", "commentsCount"):
                value = _non_negative_int(value)
            setattr(post, _RECORD_ATTRS[key], value)
        return post


def _non_negative_int(value: Any) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return 0
    return max(n, 0)
