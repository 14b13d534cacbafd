from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from hackernews.errors import PostParseError
from hackernews.models import Post, PostFilter
from hackernews.tag_scanner import TagScanner

logger = logging.getLogger(__name__)

SITE_BASE_URL = "https://news.ycombinator.com/"

ROW_DELIMITER = '<td align="right" valign="top" class="title">'
DEAD_MARKER = '<td class="title"> [dead] <a'

_POINTS_SUFFIX_RE = re.compile(re.escape(" points"), re.IGNORECASE)
_STRICT_INT_RE = re.compile(r"[+-]?\d+")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")

_JSON_TYPES = {"job": PostFilter.JOBS}


# -------------------------
# HTML mode
# -------------------------


def parse_collection_html(html: str) -> list[Post]:
    """
    Split a listing page into row fragments and parse each one.

    The segment before the first row delimiter is page preamble and is
    dropped. A page without any row yields an empty list.
    """
    segments = html.split(ROW_DELIMITER)
    posts = [parse_post_html(fragment) for fragment in segments[1:]]
    logger.debug("Parsed listing: rows=%s", len(posts))
    return posts


def parse_post_html(fragment: str) -> Post:
    """
    Parse one listing row.

    Field order matters: every scan resumes where the previous one stopped,
    mirroring the order of the fields in the row markup. Rows flagged dead
    come back as a default Post.
    """
    post = Post()
    if DEAD_MARKER in fragment:
        return post

    scanner = TagScanner(fragment)

    post.url = _parse_url(scanner.scan_tag('<a href="', '"'))
    post.title = _clean_text(scanner.scan_tag(">", "</a>"))
    post.points = _parse_points(scanner.scan_tag('<span class="score" id="score_', "</span>"))

    scanned_username = scanner.scan_tag('<a href="user?id=', '"')
    post.username = scanned_username if scanned_username is not None else "HN"

    post.post_id = scanner.scan_tag('<a href="item?id=', '">')
    post.pretty_time = _clean_text(scanner.scan_tag(">", "</a>"))
    post.comments_count = _parse_comments_count(scanner.scan_tag('">', "</a>"))

    if scanned_username is None and post.comments_count == 0 and post.post_id is None:
        post.type = PostFilter.JOBS
        post.username = "Jobs"
    elif post.url is None or post.url.lower() != "http":
        # Whole-string compare, not a prefix check: almost every row lands here.
        post.type = PostFilter.ASK
        if post.url is not None:
            post.url = SITE_BASE_URL + post.url
    else:
        post.type = PostFilter.DEFAULT

    return post


def _parse_url(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    raw = raw.strip()
    if not raw or any(ch.isspace() for ch in raw):
        return None
    try:
        urlsplit(raw)
    except ValueError:
        # e.g. an unbalanced IPv6 bracket in the host
        return None
    return raw


def _clean_text(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    if "&" not in raw and "<" not in raw:
        return raw
    # Entities and stray inline tags (e.g. <span> around the age).
    return BeautifulSoup(raw, "lxml").get_text()


def _parse_points(score_block: Optional[str]) -> int:
    if score_block is None:
        return 0
    idx = score_block.find(">")
    if idx < 0:
        return 0
    text = _POINTS_SUFFIX_RE.sub("", score_block[idx + 1 :])
    if not _STRICT_INT_RE.fullmatch(text):
        return 0
    return max(int(text), 0)


def _parse_comments_count(raw: Optional[str]) -> int:
    if raw is None or raw == "discuss":
        return 0
    m = _LEADING_INT_RE.match(raw)
    if not m:
        return 0
    return max(int(m.group(1)), 0)


# -------------------------
# JSON mode
# -------------------------


def parse_post_json(obj: Mapping[str, Any]) -> Post:
    """
    Map one API item onto a Post.

    Raises:
        PostParseError: if `obj` is not a mapping or has no string url.
    """
    if not isinstance(obj, Mapping):
        raise PostParseError(f"Expected a JSON object, got {type(obj).__name__}")

    url = obj.get("url")
    if not isinstance(url, str) or _parse_url(url) is None:
        raise PostParseError(f"Item has no usable url: id={obj.get('id')}", field="url")

    post = Post(
        id=_json_int(obj.get("id")),
        title=obj.get("title") if isinstance(obj.get("title"), str) else None,
        username=obj.get("by") if isinstance(obj.get("by"), str) else None,
        url=_parse_url(url),
        score=_json_int(obj.get("score")),
        time=_json_int(obj.get("time")),
    )

    kids = obj.get("kids")
    if isinstance(kids, list) and all(_json_int(k) is not None for k in kids):
        post.kids = list(kids)

    descendants = _json_int(obj.get("descendants"))
    if descendants is not None:
        post.comments_count = max(descendants, 0)

    post.dead = obj.get("dead") is True

    item_type = obj.get("type")
    if isinstance(item_type, str):
        post.type = _JSON_TYPES.get(item_type, PostFilter.DEFAULT)

    return post


def _json_int(value: Any) -> Optional[int]:
    # bool is an int subclass; JSON true/false is not a number here.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
