"""Concurrent collection of contests from every configured source.

Each scraper runs its fetch + normalize step in its own worker thread.
Results are joined before anything is returned, a failing or slow source
only removes its own contribution, and the retention window is applied
to the merged list.
"""
from __future__ import annotations

import dataclasses
import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait

from contest_sniffer.scrapers.common import Contest, SourceResult

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


class AllSourcesFailedError(RuntimeError):
    """Raised when no contest source produced a usable response."""


def retention_cutoff(now: int, start_search_from: int) -> int:
    """Earliest end instant a contest may have and still be kept.

    A negative *start_search_from* moves the cutoff into the future.
    """
    return now - start_search_from * SECONDS_PER_DAY


def apply_retention_window(contests, now: int, start_search_from: int) -> list[Contest]:
    cutoff = retention_cutoff(now, start_search_from)
    return [
        c for c in contests
        if c.end_time is not None and c.end_time >= cutoff
    ]


class ContestAggregator:
    def __init__(self, scrapers, timeout: float | None = None):
        self.scrapers = list(scrapers)
        self.timeout = timeout

    def fetch_all(self, now: int) -> list[SourceResult]:
        """Run every scraper concurrently and wait for all of them to settle."""
        if not self.scrapers:
            return []

        executor = ThreadPoolExecutor(
            max_workers=len(self.scrapers), thread_name_prefix='contest-source',
        )
        try:
            futures = {
                executor.submit(scraper.fetch_contests, now): scraper
                for scraper in self.scrapers
            }
            done, not_done = wait(futures, timeout=self.timeout)

            results = []
            for future, scraper in futures.items():
                platform = scraper.PLATFORM_DISPLAY
                if future in not_done:
                    future.cancel()
                    logger.warning(f"{platform} did not answer within {self.timeout}s, ignoring it")
                    results.append(SourceResult(platform=platform, failed=True, error='timeout'))
                    continue
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error(f"Unexpected error collecting {platform} contests: {e}")
                    results.append(SourceResult(platform=platform, failed=True, error=str(e)))
            return results
        finally:
            # Abandon stragglers instead of blocking on them
            executor.shutdown(wait=False, cancel_futures=True)

    def collect(self, now: int | None = None, start_search_from: int = 0) -> list[Contest]:
        """Fetch, tag with platform, merge and apply the retention window."""
        if now is None:
            now = int(time.time())

        results = self.fetch_all(now)
        if results and all(r.failed for r in results):
            raise AllSourcesFailedError(
                "All contest sources failed: "
                + ", ".join(f"{r.platform} ({r.error})" for r in results)
            )

        merged = []
        for result in results:
            merged.extend(
                dataclasses.replace(contest, platform=result.platform)
                for contest in result.contests
            )

        kept = apply_retention_window(merged, now, start_search_from)
        logger.info(
            f"Collected {len(merged)} contests from {len(results)} sources, "
            f"{len(kept)} inside the retention window"
        )
        return kept
