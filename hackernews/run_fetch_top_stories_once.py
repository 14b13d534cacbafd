from __future__ import annotations

import json
import logging

from hackernews.hn_crawler import HackerNewsCrawler
from hackernews.models import Post
from hackernews.settings import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    s = load_settings()
    crawler = HackerNewsCrawler.from_settings(s)

    top_ids: list[int] = []
    for result in crawler.fetch_top_ids():
        if result.ok and not result.is_from_local_cache:
            top_ids = result.value or []
        elif result.error is not None:
            logger.error("Top ids fetch failed: err=%s", result.error)
            return
    logger.info("Fetched top ids: %s", len(top_ids))

    posts: list[Post] = []
    for item_id in top_ids[: s.max_api_items]:
        for result in crawler.fetch_post_by_id(item_id):
            if result.is_from_local_cache:
                continue
            if result.error is not None:
                logger.warning("Skipping item due to error: id=%s err=%s", item_id, result.error)
                continue
            posts.append(result.value)
    logger.info("Fetched posts: %s", len(posts))

    sample = [
        {
            "id": p.id,
            "title": p.title,
            "by": p.username,
            "score": p.score,
            "comments": p.comments_count,
            "domain": p.domain,
            "url": p.url,
        }
        for p in posts
    ]
    print(json.dumps(sample, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
