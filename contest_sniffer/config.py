from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


DEFAULT_PLATFORM_ALIASES = {
    'codeforces': 'Codeforces',
    'cf': 'Codeforces',
    'atcoder': 'AtCoder',
    'at': 'AtCoder',
    'ac': 'AtCoder',
    'lg': 'Luogu',
    '洛谷': 'Luogu',
    'luogu': 'Luogu',
}

DEFAULT_GREETINGS = [
    '还在打OI哦，休息一下吧 ♪(´▽｀)',
    '今日宜：AK',
    'ο(=•ω＜=)ρ⌒☆',
    '想打比赛吗？那就来吧！(o゜▽゜)o☆',
    '今天你开long long了吗 ( •̀ ω •́ )',
    '唉你们OIer好可怕 O_O',
]

DEFAULT_STATUS_TEXT = {
    'upcoming': "还没开始 (●' - '●)",
    'coding': '正在火热进行 OwO',
    'ended': '结束嘞 o_o ....',
}


# Config key -> (environment variable, parser)
_ENV_SETTINGS = {
    'SECRET_KEY': ('SECRET_KEY', str),
    'DEFAULT_MAX_CONTESTS': ('DEFAULT_MAX_CONTESTS', int),
    'START_SEARCH_FROM': ('START_SEARCH_FROM', int),
    'FETCH_TIMEOUT_MS': ('FETCH_TIMEOUT_MS', int),
    'PLATFORM_ALIASES': ('PLATFORM_ALIASES', json.loads),
    'GREETINGS': ('CONTEST_GREETINGS', json.loads),
    'LOG_FILE_MAX_BYTES': ('LOG_FILE_MAX_BYTES', int),
    'LOG_FILE_BACKUP_COUNT': ('LOG_FILE_BACKUP_COUNT', int),
}

_STATUS_TEXT_ENV = {
    'upcoming': 'STATUS_TEXT_UPCOMING',
    'coding': 'STATUS_TEXT_CODING',
    'ended': 'STATUS_TEXT_ENDED',
}


class BaseConfig:
    """Base configuration shared across all environments.

    Class attributes are defaults; ``resolve_config`` applies environment
    overrides once the ``.env`` files have been loaded.
    """

    READ_ENVIRONMENT = True

    # Flask core
    SECRET_KEY = 'fallback-secret-key-change-me'

    # Contest query settings
    DEFAULT_MAX_CONTESTS = 5
    START_SEARCH_FROM = 0
    FETCH_TIMEOUT_MS = 10000
    PLATFORM_ALIASES = DEFAULT_PLATFORM_ALIASES
    GREETINGS = DEFAULT_GREETINGS
    STATUS_TEXT = DEFAULT_STATUS_TEXT

    # File logging (0 disables the rotating handler)
    LOG_FILE_MAX_BYTES = 0
    LOG_FILE_BACKUP_COUNT = 3


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    DEBUG = True


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    DEBUG = False
    LOG_FILE_MAX_BYTES = 5 * 1024 * 1024


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    READ_ENVIRONMENT = False
    SECRET_KEY = 'test-secret-key'
    FETCH_TIMEOUT_MS = 1000
    GREETINGS = ['今日宜：AK']


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}


def resolve_config(config_class) -> dict:
    """Upper-case settings of *config_class* with environment overrides.

    Reads ``os.environ`` at call time, so call it after ``load_env``.
    """
    settings = {k: getattr(config_class, k) for k in dir(config_class) if k.isupper()}
    settings['STATUS_TEXT'] = dict(settings.get('STATUS_TEXT') or DEFAULT_STATUS_TEXT)
    if not settings.get('READ_ENVIRONMENT', True):
        return settings

    for key, (env_name, parse) in _ENV_SETTINGS.items():
        raw = os.environ.get(env_name)
        if raw:
            settings[key] = parse(raw)
    for phase, env_name in _STATUS_TEXT_ENV.items():
        text = os.environ.get(env_name)
        if text:
            settings['STATUS_TEXT'][phase] = text
    return settings


def _check_range(name: str, value: int, low: int, high: int) -> int:
    value = int(value)
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")
    return value


@dataclass(frozen=True)
class SnifferConfig:
    """Immutable settings handed to every pipeline stage."""

    default_max_contests: int = 5
    start_search_from: int = 0
    timeout_ms: int = 10000
    platform_aliases: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_PLATFORM_ALIASES))
    )
    greetings: tuple[str, ...] = tuple(DEFAULT_GREETINGS)
    status_text: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_STATUS_TEXT))
    )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_mapping(cls, mapping) -> SnifferConfig:
        """Build from a Flask config (or any mapping of upper-case keys).

        Raises ``ValueError`` when a numeric setting is out of range.
        """
        aliases = mapping.get('PLATFORM_ALIASES', DEFAULT_PLATFORM_ALIASES)
        if not isinstance(aliases, Mapping):
            raise ValueError('PLATFORM_ALIASES must be a mapping of alias -> platform')
        greetings = mapping.get('GREETINGS') or DEFAULT_GREETINGS
        status_text = dict(DEFAULT_STATUS_TEXT)
        status_text.update(mapping.get('STATUS_TEXT') or {})

        return cls(
            default_max_contests=_check_range(
                'DEFAULT_MAX_CONTESTS', mapping.get('DEFAULT_MAX_CONTESTS', 5), 1, 30),
            start_search_from=_check_range(
                'START_SEARCH_FROM', mapping.get('START_SEARCH_FROM', 0), -15, 15),
            timeout_ms=_check_range(
                'FETCH_TIMEOUT_MS', mapping.get('FETCH_TIMEOUT_MS', 10000), 1000, 60000),
            platform_aliases=MappingProxyType({str(k): str(v) for k, v in aliases.items()}),
            greetings=tuple(greetings),
            status_text=MappingProxyType(status_text),
        )

    @classmethod
    def from_object(cls, obj) -> SnifferConfig:
        """Build from a config class such as ``config_map['production']``."""
        return cls.from_mapping(resolve_config(obj))
