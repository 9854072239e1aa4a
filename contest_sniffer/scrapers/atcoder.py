from __future__ import annotations

from datetime import datetime
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .base import BaseScraper
from .common import Contest, compute_phase
from . import register_scraper

# Start times are rendered like "2025-01-04 21:00:00+0900"
_START_TIME_FORMAT = '%Y-%m-%d %H:%M:%S%z'


def parse_duration(text: str) -> int:
    """Convert an AtCoder "HH:MM" duration (hours may exceed 24) to seconds."""
    hours, minutes = text.strip().split(':')
    return int(hours) * 3600 + int(minutes) * 60


def parse_start_time(text: str) -> int:
    return int(datetime.strptime(text.strip(), _START_TIME_FORMAT).timestamp())


@register_scraper
class AtCoderScraper(BaseScraper):
    PLATFORM_NAME = "atcoder"
    PLATFORM_DISPLAY = "AtCoder"
    BASE_URL = "https://atcoder.jp"
    CONTESTS_URL = "https://atcoder.jp/contests"

    def fetch_raw(self) -> list:
        """Scrape the contest tables; AtCoder has no public contest API."""
        resp = self._get(self.CONTESTS_URL)
        return self.extract_rows(resp.text)

    def extract_rows(self, page_content: str) -> list[dict]:
        soup = BeautifulSoup(page_content, 'html.parser')
        rows = []
        seen_links = set()

        for tr in soup.select('.table-default tbody tr'):
            cells = tr.find_all('td')
            if len(cells) < 3:
                continue
            link = cells[1].find('a')
            href = link.get('href') if link else None
            # Running contests are listed in more than one table
            if href and href in seen_links:
                continue
            if href:
                seen_links.add(href)
            rows.append({
                'start_time': cells[0].get_text(strip=True),
                'href': href,
                'name': link.get_text(strip=True) if link else '',
                'duration': cells[2].get_text(strip=True),
            })
        return rows

    def parse_record(self, raw, now: int) -> Contest | None:
        if not raw.get('start_time') or not raw.get('href'):
            return None

        start_time = parse_start_time(raw['start_time'])
        duration = parse_duration(raw['duration']) if raw.get('duration') else 0

        return Contest(
            name=raw.get('name', ''),
            start_time=start_time,
            duration=duration,
            phase=compute_phase(start_time, duration, now),
            url=urljoin(self.BASE_URL, raw['href']),
        )
