"""Shared test fixtures for the contest sniffer test suite."""

import time
from datetime import datetime

import pytest

from contest_sniffer import create_app
from contest_sniffer.scrapers.common import Contest, Phase, SourceResult, compute_phase


# 2025-01-01 12:00 local time
NOW = int(datetime(2025, 1, 1, 12, 0).timestamp())


class FakeScraper:
    """Stands in for a BaseScraper subclass in aggregator/pipeline tests."""

    def __init__(self, platform, contests=None, failed=False, error=None, delay=0):
        self.PLATFORM_DISPLAY = platform
        self.PLATFORM_NAME = platform.lower()
        self.contests = contests or []
        self.failed = failed
        self.error = error
        self.delay = delay
        self.calls = []

    def fetch_contests(self, now=None):
        self.calls.append(now)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.failed:
            return SourceResult(platform=self.PLATFORM_DISPLAY, failed=True, error='boom')
        return SourceResult(platform=self.PLATFORM_DISPLAY, contests=list(self.contests))


def make_contest(name, start_time, duration=7200, phase=None, url='', platform=None):
    if phase is None:
        phase = Phase.UPCOMING if start_time is None else compute_phase(start_time, duration, NOW)
    return Contest(
        name=name,
        start_time=start_time,
        duration=duration,
        phase=phase,
        url=url or f'https://example.com/{name}',
        platform=platform,
    )


@pytest.fixture()
def app():
    """Create a Flask application configured for testing."""
    application = create_app('testing')
    yield application


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""
    return app.test_client()
