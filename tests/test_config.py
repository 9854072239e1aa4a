"""Tests for configuration classes and the immutable query settings."""

import pytest

import contest_sniffer
from contest_sniffer import create_app, load_env
from contest_sniffer.config import (
    DEFAULT_PLATFORM_ALIASES,
    DEFAULT_STATUS_TEXT,
    SnifferConfig,
    config_map,
    resolve_config,
)

_ENV_KEYS = ('FLASK_ENV', 'DEFAULT_MAX_CONTESTS', 'START_SEARCH_FROM', 'STATUS_TEXT_CODING')


@pytest.fixture()
def project_root(tmp_path, monkeypatch):
    """Point the .env lookup at an empty directory and isolate os.environ."""
    for key in _ENV_KEYS:
        # set then delete so undo also removes values written by load_dotenv
        monkeypatch.setenv(key, 'unset')
        monkeypatch.delenv(key)
    monkeypatch.setattr(contest_sniffer, '_PROJECT_ROOT', str(tmp_path))
    return tmp_path


class TestSnifferConfig:
    def test_defaults(self):
        config = SnifferConfig()
        assert config.default_max_contests == 5
        assert config.start_search_from == 0
        assert config.timeout_seconds == 10
        assert config.platform_aliases['cf'] == 'Codeforces'
        assert set(config.status_text) == {'upcoming', 'coding', 'ended'}

    def test_from_object(self):
        config = SnifferConfig.from_object(config_map['testing'])
        assert config.timeout_ms == 1000
        assert config.greetings == ('今日宜：AK',)

    def test_from_mapping_overrides(self):
        config = SnifferConfig.from_mapping({
            'DEFAULT_MAX_CONTESTS': 10,
            'START_SEARCH_FROM': -3,
            'PLATFORM_ALIASES': {'cfs': 'Codeforces'},
            'STATUS_TEXT': {'coding': 'LIVE'},
        })
        assert config.default_max_contests == 10
        assert config.start_search_from == -3
        assert dict(config.platform_aliases) == {'cfs': 'Codeforces'}
        assert config.status_text['coding'] == 'LIVE'
        assert config.status_text['ended']

    @pytest.mark.parametrize('key,value', [
        ('DEFAULT_MAX_CONTESTS', 0),
        ('DEFAULT_MAX_CONTESTS', 31),
        ('START_SEARCH_FROM', 16),
        ('START_SEARCH_FROM', -16),
        ('FETCH_TIMEOUT_MS', 999),
        ('FETCH_TIMEOUT_MS', 60001),
    ])
    def test_out_of_range_rejected(self, key, value):
        with pytest.raises(ValueError, match=key):
            SnifferConfig.from_mapping({key: value})

    def test_aliases_must_be_mapping(self):
        with pytest.raises(ValueError):
            SnifferConfig.from_mapping({'PLATFORM_ALIASES': ['cf']})

    def test_alias_table_is_read_only(self):
        config = SnifferConfig.from_mapping({'PLATFORM_ALIASES': DEFAULT_PLATFORM_ALIASES})
        with pytest.raises(TypeError):
            config.platform_aliases['tc'] = 'TopCoder'

    def test_config_map(self):
        assert set(config_map) == {'development', 'production', 'testing'}
        assert config_map['testing'].TESTING is True


class TestEnvironmentOverrides:
    def test_dotenv_values_reach_app(self, project_root):
        (project_root / '.env').write_text('DEFAULT_MAX_CONTESTS=2\nSTART_SEARCH_FROM=3\n')

        config = create_app('development').extensions['sniffer_config']

        assert config.default_max_contests == 2
        assert config.start_search_from == 3

    def test_dotenv_overrides_env_specific_file(self, project_root):
        (project_root / '.env.development').write_text('DEFAULT_MAX_CONTESTS=7\nSTART_SEARCH_FROM=1\n')
        (project_root / '.env').write_text('DEFAULT_MAX_CONTESTS=2\n')

        config = create_app('development').extensions['sniffer_config']

        assert config.default_max_contests == 2
        assert config.start_search_from == 1

    def test_flask_env_from_dotenv_selects_config(self, project_root):
        (project_root / '.env').write_text('FLASK_ENV=production\n')
        assert load_env() == 'production'

    def test_explicit_env_wins_over_flask_env(self, project_root):
        (project_root / '.env').write_text('FLASK_ENV=production\n')
        assert load_env('development') == 'development'

    def test_out_of_range_value_rejected_at_startup(self, project_root):
        (project_root / '.env').write_text('DEFAULT_MAX_CONTESTS=99\n')
        with pytest.raises(ValueError, match='DEFAULT_MAX_CONTESTS'):
            create_app('development')

    def test_testing_config_ignores_environment(self, project_root, monkeypatch):
        monkeypatch.setenv('DEFAULT_MAX_CONTESTS', '2')
        config = create_app('testing').extensions['sniffer_config']
        assert config.default_max_contests == 5

    def test_status_text_override(self, project_root, monkeypatch):
        monkeypatch.setenv('STATUS_TEXT_CODING', 'LIVE')

        settings = resolve_config(config_map['development'])

        assert settings['STATUS_TEXT']['coding'] == 'LIVE'
        assert settings['STATUS_TEXT']['ended'] == DEFAULT_STATUS_TEXT['ended']
        assert DEFAULT_STATUS_TEXT['coding'] != 'LIVE'
