from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional

from contest_sniffer.scrapers.common import Contest

logger = logging.getLogger(__name__)

_DATE_TOKEN_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Long option name -> short flag used by the chat command
_OPTION_ALIASES = {
    'platform': 'p',
    'phase': 's',
    'count': 'n',
    'date': 'd',
}


def _parse_count(value) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.info(f"Ignoring non-integer count {value!r}")
        return None


@dataclass(frozen=True)
class QueryOptions:
    platform: Optional[str] = None
    phase: Optional[str] = None
    count: Optional[int] = None
    date: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw) -> QueryOptions:
        """Build from request args, a dict, or an argparse namespace."""
        if raw is None:
            return cls()
        if isinstance(raw, QueryOptions):
            return raw
        if not isinstance(raw, Mapping) and not hasattr(raw, 'get'):
            raw = vars(raw)

        values = {}
        for name, short in _OPTION_ALIASES.items():
            value = raw.get(name)
            if value is None:
                value = raw.get(short)
            values[name] = value

        return cls(
            platform=values['platform'] or None,
            phase=values['phase'] or None,
            count=_parse_count(values['count']),
            date=values['date'] or None,
        )


def resolve_platform(token: str, aliases: Mapping[str, str]) -> Optional[str]:
    """Map a user-typed platform token to its canonical name.

    Alias keys are tried first, then the canonical names themselves, both
    case-insensitively. Returns None for an unknown token.
    """
    wanted = token.strip().lower()
    for alias, platform in aliases.items():
        if alias.lower() == wanted:
            return platform
    for platform in aliases.values():
        if platform.lower() == wanted:
            return platform
    return None


def parse_date_token(token: str, today: date | None = None) -> Optional[date]:
    """Return the target date for ``today`` or a strict YYYY-MM-DD token.

    Anything else returns None, which disables the date filter.
    """
    token = token.strip()
    if token.lower() == 'today':
        return today or date.today()
    if not _DATE_TOKEN_RE.match(token):
        return None
    try:
        return datetime.strptime(token, '%Y-%m-%d').date()
    except ValueError:
        return None


def starts_on(contest: Contest, target: date) -> bool:
    """True if the contest starts on *target* in the local calendar."""
    if not contest.has_start_time:
        return False
    return datetime.fromtimestamp(contest.start_time).date() == target


def filter_contests(contests, options: QueryOptions, aliases: Mapping[str, str],
                    today: date | None = None) -> list[Contest]:
    processed = list(contests)

    if options.platform:
        platform = resolve_platform(options.platform, aliases)
        if platform is None:
            logger.info(f"Unknown platform {options.platform!r}, nothing matches")
            return []
        processed = [c for c in processed if c.platform == platform]

    if options.phase:
        # Substring match so partial tokens such as "up" still work
        wanted = options.phase.lower()
        processed = [c for c in processed if wanted in c.phase.value]

    if options.date:
        target = parse_date_token(options.date, today)
        if target is None:
            logger.info(f"Invalid date format {options.date!r}, -d option ignored")
        else:
            processed = [c for c in processed if starts_on(c, target)]

    return processed
