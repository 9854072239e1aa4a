from __future__ import annotations

from functools import cmp_to_key

from contest_sniffer.scrapers.common import Contest, Phase


def compare_contests(a: Contest, b: Contest) -> int:
    """Order by start time; fall back to phase when a start time is missing.

    Without both start times, running contests float to the front and
    ended ones sink to the back. Anything else compares equal.
    """
    if a.has_start_time and b.has_start_time:
        return a.start_time - b.start_time
    if a.phase is Phase.CODING:
        return -1
    if b.phase is Phase.CODING:
        return 1
    if a.phase is Phase.ENDED:
        return 1
    if b.phase is Phase.ENDED:
        return -1
    return 0


def sort_contests(contests) -> list[Contest]:
    return sorted(contests, key=cmp_to_key(compare_contests))


def effective_count(requested: int | None, default: int) -> int:
    if requested is not None and requested > 0:
        return requested
    return default


def cap_contests(contests, requested: int | None, default: int) -> list[Contest]:
    return list(contests)[:effective_count(requested, default)]
