"""``oi`` command: list recent online programming contests.

Usage:
    oi                                   # upcoming/running contests
    oi -d today -s ended                 # contests held today that already ended
    oi -p cf -d 2025-01-01 -s upcoming -n 3
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from contest_sniffer import load_env
from contest_sniffer.config import SnifferConfig, config_map
from contest_sniffer.services.formatter import ERROR_MESSAGE, render_contests
from contest_sniffer.services.pipeline import PipelineError, run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='oi',
        description='获取近期的 OI 线上赛事的日程',
    )
    parser.add_argument(
        '-p', '--platform',
        help='筛选比赛平台，可用字段参见 PLATFORM_ALIASES 设置',
    )
    parser.add_argument(
        '-s', '--phase',
        help='筛选比赛阶段 (支持 "upcoming", "coding", "ended" 三种参数)',
    )
    parser.add_argument('-n', '--count', help='限制一次性输出的比赛总数')
    parser.add_argument(
        '-d', '--date',
        help='查询指定日期的比赛（格式：YYYY-MM-DD 或 today）',
    )
    parser.add_argument('--json', action='store_true', help='以 JSON 格式输出')
    parser.add_argument('--env', default=None, help='配置环境 (development/production/testing)')
    parser.add_argument('-v', '--verbose', action='store_true', help='输出调试日志')
    return parser


def main(argv=None, scrapers=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    env = load_env(args.env)
    config = SnifferConfig.from_object(config_map.get(env, config_map['development']))

    try:
        contests = run(args, config, scrapers=scrapers)
    except PipelineError:
        print(ERROR_MESSAGE, file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([c.to_dict() for c in contests], ensure_ascii=False, indent=2))
    else:
        print(render_contests(contests, config).rstrip('\n'))
    return 0


if __name__ == '__main__':
    sys.exit(main())
