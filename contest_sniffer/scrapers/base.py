from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

import requests

from .common import Contest, SourceResult


class BaseScraper(ABC):
    PLATFORM_NAME: str = ""
    PLATFORM_DISPLAY: str = ""
    BASE_URL: str = ""
    CONTESTS_URL: str = ""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout
        self.logger = logging.getLogger(f'scraper.{self.PLATFORM_NAME}')
        self.session = self._create_session()

    @abstractmethod
    def fetch_raw(self) -> list:
        """Return the provider's raw contest records. May raise."""
        ...

    @abstractmethod
    def parse_record(self, raw, now: int) -> Contest | None:
        """Map one raw record to a Contest, or None if it is unusable."""
        ...

    def normalize(self, raw_records, now: int) -> list[Contest]:
        contests = []
        for raw in raw_records:
            try:
                contest = self.parse_record(raw, now)
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                self.logger.debug(f"Skipping malformed {self.PLATFORM_NAME} record {raw!r}: {e}")
                continue
            if contest is None:
                self.logger.debug(f"Skipping incomplete {self.PLATFORM_NAME} record {raw!r}")
                continue
            contests.append(contest)
        return contests

    def fetch_contests(self, now: int | None = None) -> SourceResult:
        """Fetch and normalize; a provider failure yields an empty result."""
        if now is None:
            now = int(time.time())
        try:
            raw_records = self.fetch_raw()
            contests = self.normalize(raw_records, now)
        except Exception as e:
            self.logger.error(f"Error occurs when fetching {self.PLATFORM_DISPLAY} contests: {e}")
            return SourceResult(platform=self.PLATFORM_DISPLAY, failed=True, error=str(e))
        self.logger.info(f"Fetched {len(contests)} contests from {self.PLATFORM_DISPLAY}")
        return SourceResult(platform=self.PLATFORM_DISPLAY, contests=contests)

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'
        })
        return session

    def close(self):
        self.session.close()

    def _get(self, url, **kwargs) -> requests.Response:
        resp = self.session.get(url, timeout=self.timeout, **kwargs)
        resp.raise_for_status()
        return resp
