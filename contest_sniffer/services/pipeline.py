"""Contest query pipeline: aggregate, filter, sort, cap.

``run`` is the single entry point for the command surfaces. It returns
the contests to present (possibly an empty list, meaning "no matching
contests") or raises ``PipelineError`` when the query itself failed.
"""
from __future__ import annotations

import logging
import time
from datetime import date

from contest_sniffer.config import SnifferConfig
from contest_sniffer.scrapers import get_all_scrapers, get_scraper_instance
from contest_sniffer.scrapers.common import Contest
from contest_sniffer.services.aggregator import ContestAggregator
from contest_sniffer.services.contest_filter import QueryOptions, filter_contests
from contest_sniffer.services.ordering import cap_contests, sort_contests

logger = logging.getLogger(__name__)

# Allow the join a little longer than a single request may take
_JOIN_GRACE_SECONDS = 2.0


class PipelineError(RuntimeError):
    """The contest query failed as a whole."""


class ContestPipeline:
    def __init__(self, scrapers, config: SnifferConfig):
        self.config = config
        self.aggregator = ContestAggregator(
            scrapers, timeout=config.timeout_seconds + _JOIN_GRACE_SECONDS,
        )

    @classmethod
    def from_config(cls, config: SnifferConfig) -> ContestPipeline:
        """Build a pipeline over every registered scraper."""
        scrapers = [
            get_scraper_instance(name, timeout=config.timeout_seconds)
            for name in get_all_scrapers()
        ]
        return cls(scrapers, config)

    def close(self):
        """Release the HTTP sessions held by the scrapers."""
        for scraper in self.aggregator.scrapers:
            close = getattr(scraper, 'close', None)
            if close is not None:
                close()

    def run(self, options=None, now: int | None = None,
            today: date | None = None) -> list[Contest]:
        options = QueryOptions.from_mapping(options)
        if now is None:
            now = int(time.time())

        try:
            contests = self.aggregator.collect(now, self.config.start_search_from)
            contests = filter_contests(
                contests, options, self.config.platform_aliases, today=today,
            )
            contests = sort_contests(contests)
            return cap_contests(contests, options.count, self.config.default_max_contests)
        except Exception as e:
            logger.error(f"Error occurs when querying contests: {e}")
            raise PipelineError(str(e)) from e


def run(raw_options, config: SnifferConfig, scrapers=None, now: int | None = None,
        today: date | None = None) -> list[Contest]:
    if scrapers is not None:
        return ContestPipeline(scrapers, config).run(raw_options, now=now, today=today)

    pipeline = ContestPipeline.from_config(config)
    try:
        return pipeline.run(raw_options, now=now, today=today)
    finally:
        pipeline.close()
