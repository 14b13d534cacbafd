from __future__ import annotations

import json
import logging
from pathlib import Path

from hackernews.hn_crawler import HackerNewsCrawler
from hackernews.settings import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)

logger = logging.getLogger(__name__)


def main() -> None:
    s = load_settings()
    crawler = HackerNewsCrawler.from_settings(s)
    post_filter = s.listing_filter

    posts = []
    for result in crawler.fetch_listing(post_filter, page=s.listing_page):
        if result.error is not None:
            logger.error("Listing fetch failed: source=%s err=%s", result.source, result.error)
            continue
        posts = result.value or []
        logger.info("Fetched posts: %s (source=%s)", len(posts), result.source)

    if not posts and s.dump_html_on_empty:
        html = crawler.fetch_listing_html(post_filter, page=s.listing_page)
        Path(s.dump_html_path).write_text(html, encoding="utf-8")
        logger.warning("No posts parsed. Dumped HTML to: %s", s.dump_html_path)

    sample = [
        {
            **p.to_record(),
            "type": p.type.value if p.type is not None else None,
            "domain": p.domain,
        }
        for p in posts[:10]
    ]
    print(json.dumps(sample, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
