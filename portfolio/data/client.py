"""
Content Client - backend collection API
=======================================
Reads the portfolio's JSON collections (`GET <base>/api/<name>`).

Every failure is fail-soft: the caller gets an empty list and the page shows
an empty section, never an error.
"""
from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from portfolio.config import AppConfig


logger = logging.getLogger(__name__)


class ContentClient:
    """
    Single-attempt JSON collection reader.

    - One GET per call, no retry, no caching
    - Non-success status, network errors, timeouts, non-JSON bodies and
      non-list bodies all resolve to []
    """

    def __init__(self, cfg: AppConfig, origin: Optional[str] = None):
        self.cfg = cfg
        self._base_url = cfg.api_base(origin)

    def url_for(self, name: str) -> str:
        return f"{self._base_url}/api/{quote(name, safe='')}"

    def load_collection(self, name: str) -> List[dict]:
        url = self.url_for(name)
        try:
            resp = requests.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.cfg.request_timeout,
            )
            if resp.status_code >= 300:
                logger.warning("GET %s returned HTTP %s", url, resp.status_code)
                return []
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            # requests' JSONDecodeError is a ValueError subclass
            logger.warning("GET %s failed: %s", url, type(e).__name__)
            return []

        if not isinstance(data, list):
            logger.warning("GET %s returned %s, expected a list", url, type(data).__name__)
            return []
        return [item for item in data if isinstance(item, dict)]


def get_content_client(cfg: AppConfig, origin: Optional[str] = None) -> ContentClient:
    """Factory function to get a content client instance."""
    return ContentClient(cfg, origin=origin)
