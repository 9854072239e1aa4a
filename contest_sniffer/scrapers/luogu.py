from __future__ import annotations

from .base import BaseScraper
from .common import Contest, compute_phase
from . import register_scraper


@register_scraper
class LuoguScraper(BaseScraper):
    PLATFORM_NAME = "luogu"
    PLATFORM_DISPLAY = "Luogu"
    BASE_URL = "https://www.luogu.com.cn"
    CONTESTS_URL = "https://www.luogu.com.cn/contest/list?_contentOnly=1"

    def __init__(self, timeout: float = 10.0):
        super().__init__(timeout=timeout)
        # Ask for the JSON payload instead of the rendered page
        self.session.headers.update({
            'X-Requested-With': 'XMLHttpRequest',
            'Referer': 'https://www.luogu.com.cn/contest/list',
        })

    def fetch_raw(self) -> list:
        resp = self._get(self.CONTESTS_URL)
        data = resp.json()

        current_data = data.get('currentData') if isinstance(data, dict) else None
        contests = (current_data or {}).get('contests') or {}
        records = contests.get('result') if isinstance(contests, dict) else None
        if not isinstance(records, list):
            raise ValueError("Luogu API structure mismatched")
        return records

    def parse_record(self, raw, now: int) -> Contest | None:
        start_time = int(raw['startTime'])
        end_time = raw.get('endTime')
        duration = int(end_time) - start_time if end_time is not None else 0
        if duration < 0:
            raise ValueError(f"endTime before startTime ({end_time} < {start_time})")

        return Contest(
            name=str(raw.get('name', '')),
            start_time=start_time,
            duration=duration,
            phase=compute_phase(start_time, duration, now),
            url=f"{self.BASE_URL}/contest/{raw['id']}",
        )
