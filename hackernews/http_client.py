from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpConfig:
    timeout_sec: float
    user_agent: str


class HttpClient:
    """
    Thin HTTP client wrapper:
    - Timeout
    - Shared session and User-Agent
    - Logs meaningful failures

    One attempt per request. Callers decide what to do with a failure.
    """

    def __init__(self, config: HttpConfig, session: Optional[requests.Session] = None):
        self._cfg = config
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": self._cfg.user_agent,
                "Accept-Language": "en-US,en;q=0.9",
            }
        )

    def get_text(self, url: str) -> str:
        """
        GET an URL and return response body as text.

        Raises:
            requests.HTTPError: non-2xx responses
            requests.RequestException: network errors
        """
        try:
            resp = self._session.get(url, timeout=self._cfg.timeout_sec)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("HTTP GET failed: url=%s err=%s", url, e)
            raise
        resp.encoding = "utf-8"
        return resp.text

    def close(self) -> None:
        self._session.close()
