from __future__ import annotations

from .base import BaseScraper
from .common import Contest, compute_phase
from . import register_scraper


@register_scraper
class CodeforcesScraper(BaseScraper):
    PLATFORM_NAME = "codeforces"
    PLATFORM_DISPLAY = "Codeforces"
    BASE_URL = "https://codeforces.com"
    CONTESTS_URL = "https://codeforces.com/api/contest.list"

    def fetch_raw(self) -> list:
        """Fetch the contest list from the official API (gym excluded)."""
        resp = self._get(
            self.CONTESTS_URL,
            params={'gym': 'false'},
            headers={'Accept': 'application/json'},
        )
        data = resp.json()
        if not isinstance(data, dict) or data.get('status') != 'OK' \
                or not isinstance(data.get('result'), list):
            status = data.get('status') if isinstance(data, dict) else 'No response'
            raise ValueError(f"Codeforces API structure mismatched: {status}")
        return data['result']

    def parse_record(self, raw, now: int) -> Contest | None:
        start_time = int(raw['startTimeSeconds'])
        duration = int(raw.get('durationSeconds') or 0)
        if duration < 0:
            raise ValueError(f"negative duration {duration}")

        return Contest(
            name=str(raw.get('name', '')),
            start_time=start_time,
            duration=duration,
            phase=compute_phase(start_time, duration, now),
            url=f"{self.BASE_URL}/contests/{raw['id']}",
        )
