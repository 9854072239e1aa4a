from __future__ import annotations

import random
from datetime import datetime

from contest_sniffer.scrapers.common import Contest

NO_MATCH_MESSAGE = '嗯？这里没有找到符合条件的比赛 O_O'
ERROR_MESSAGE = '出错了(T_T) 请稍后再试 (ง •_•)ง'

_HEADER_SEPARATOR = '-------------'
_ITEM_SEPARATOR = '------------'


def pick_greeting(greetings, rng=random) -> str:
    if not greetings:
        return ''
    return rng.choice(list(greetings))


def format_start_time(start_time: int) -> str:
    dt = datetime.fromtimestamp(start_time)
    return f"{dt.year}/{dt.month}/{dt.day} {dt:%H:%M:%S}"


def format_contest(contest: Contest, status_text) -> list[str]:
    lines = [
        f"比赛平台: {contest.platform}",
        f"比赛名: {contest.name}",
    ]
    if contest.has_start_time:
        lines.append(f"开始时间: {format_start_time(contest.start_time)}")
    if contest.duration:
        lines.append(f"比赛时长: {contest.duration / 60:.0f}min")
    lines.append(f"比赛状态: {status_text.get(contest.phase.value, '')}")
    if contest.url:
        lines.append(f"直达赛场: {contest.url}")
    lines.append(_ITEM_SEPARATOR)
    return lines


def render_contests(contests, config, greeting: str | None = None) -> str:
    """Render the chat reply for an already filtered, sorted and capped list."""
    if not contests:
        return NO_MATCH_MESSAGE
    if greeting is None:
        greeting = pick_greeting(config.greetings)

    lines = [greeting, _HEADER_SEPARATOR]
    for contest in contests:
        lines.extend(format_contest(contest, config.status_text))
    return '\n'.join(lines) + '\n'
