import os
from pathlib import Path

import pytest

from tiercache.domain.models.cache import CacheTier
from tiercache.infrastructure.config import settings
from tiercache.infrastructure.config.settings import (
    CacheSettings,
    clear_test_config,
    get_cache_settings,
    get_config,
    load_configuration,
    reset_configuration,
    set_config_for_testing,
)


@pytest.fixture
def fresh_config(monkeypatch, tmp_path: Path):
    """Loads configuration from a temporary directory with no .env files."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name)
    clear_test_config()
    reset_configuration()
    yield tmp_path
    reset_configuration()


def test_defaults_match_tiers(fresh_config):
    load_configuration(config_file=fresh_config / "missing.yaml")
    cache_settings = get_cache_settings()
    assert cache_settings == CacheSettings()
    assert cache_settings.ttl_for(CacheTier.PROFILE) == 300
    assert cache_settings.ttl_for(CacheTier.INSIGHTS) == 86400
    assert cache_settings.ttl_for(CacheTier.COMPARISON) == 86400
    assert cache_settings.sweep_interval_seconds == 0


def test_yaml_values_are_flattened(fresh_config):
    config_file = fresh_config / "config.yaml"
    config_file.write_text("cache:\n  profile_ttl_seconds: 60\nlogging:\n  level: debug\n")

    load_configuration(config_file=config_file)

    assert get_config('logging.level') == 'debug'
    assert get_cache_settings().profile_ttl_seconds == 60


def test_environment_overrides_yaml(fresh_config, monkeypatch):
    config_file = fresh_config / "config.yaml"
    config_file.write_text("cache:\n  insights_ttl_seconds: 100\n")
    monkeypatch.setenv("TIERCACHE_CACHE_INSIGHTS_TTL_SECONDS", "7200")

    load_configuration(config_file=config_file)

    assert get_cache_settings().insights_ttl_seconds == 7200


def test_dotenv_file_is_loaded(fresh_config, monkeypatch):
    env_file = fresh_config / ".env"
    env_file.write_text("TIERCACHE_CACHE_SWEEP_INTERVAL_SECONDS=30\n")
    monkeypatch.delenv("TIERCACHE_CACHE_SWEEP_INTERVAL_SECONDS", raising=False)

    try:
        load_configuration(config_file=fresh_config / "missing.yaml")
        assert get_cache_settings().sweep_interval_seconds == 30
    finally:
        os.environ.pop("TIERCACHE_CACHE_SWEEP_INTERVAL_SECONDS", None)


def test_invalid_values_fall_back_to_defaults(fresh_config):
    load_configuration(config_file=fresh_config / "missing.yaml")
    set_config_for_testing({
        'cache.profile_ttl_seconds': 'soon',
        'cache.comparison_ttl_seconds': -5,
    })

    cache_settings = get_cache_settings()

    assert cache_settings.profile_ttl_seconds == 300
    assert cache_settings.comparison_ttl_seconds == 86400


def test_test_config_has_highest_priority(fresh_config, monkeypatch):
    monkeypatch.setenv("TIERCACHE_CACHE_DEFAULT_TTL_SECONDS", "10")
    set_config_for_testing({'cache.default_ttl_seconds': 20})
    assert get_config('cache.default_ttl_seconds') == 20
    clear_test_config()
    assert get_config('cache.default_ttl_seconds') == 10
