from __future__ import annotations

from typing import Optional


class TagScanner:
    """
    Sequential delimiter scanner over one HTML fragment.

    Each scan_tag() call resumes at the cursor left by the previous call,
    so callers must ask for fields in the order they appear in the markup.

    After a hit the cursor rests on the end delimiter (it is not consumed),
    which lets the next call start on it, e.g. `">` closing an href and then
    `>` opening the link text. A miss returns None and leaves the cursor
    untouched.
    """

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def scan_tag(self, start_tag: str, end_tag: str) -> Optional[str]:
        start = self.source.find(start_tag, self.position)
        if start < 0:
            return None

        value_start = start + len(start_tag)
        end = self.source.find(end_tag, value_start)
        if end < 0:
            return None

        self.position = end
        return self.source[value_start:end]
