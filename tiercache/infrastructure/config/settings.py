"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
YAML configuration file (e.g., ~/.tiercache/config.yaml).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from tiercache.domain.models.cache import DEFAULT_TTL_SECONDS, TIER_DEFAULT_TTLS, CacheTier

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".tiercache"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "TIERCACHE_"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


@dataclass
class CacheSettings:
    """TTL tiers and sweep configuration handed to cache consumers."""
    default_ttl_seconds: float = DEFAULT_TTL_SECONDS
    profile_ttl_seconds: float = TIER_DEFAULT_TTLS[CacheTier.PROFILE]
    insights_ttl_seconds: float = TIER_DEFAULT_TTLS[CacheTier.INSIGHTS]
    comparison_ttl_seconds: float = TIER_DEFAULT_TTLS[CacheTier.COMPARISON]
    sweep_interval_seconds: float = 0  # 0 disables the background sweep

    def ttl_for(self, tier: CacheTier) -> float:
        return {
            CacheTier.PROFILE: self.profile_ttl_seconds,
            CacheTier.INSIGHTS: self.insights_ttl_seconds,
            CacheTier.COMPARISON: self.comparison_ttl_seconds,
        }[tier]


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML mappings into dotted keys ({'cache': {'ttl': 1}} -> {'cache.ttl': 1})."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above the current directory.")

    # 3. Environment Variables (Highest priority) are read by get_config
    _loaded = True
    logger.info("Configuration loading process completed.")


def reset_configuration() -> None:
    """Forgets loaded configuration so load_configuration() runs again."""
    global _config, _loaded
    _config = {}
    _loaded = False


def env_var_name(key: str) -> str:
    """'cache.default_ttl_seconds' -> 'TIERCACHE_CACHE_DEFAULT_TTL_SECONDS'."""
    return ENV_PREFIX + key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        return float(value) if '.' in value else int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (TIERCACHE_ prefixed)
    3. YAML config
    4. Default value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found. Returning default: {default}")
    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def _get_seconds(key: str, default: float) -> float:
    value = get_config(key, default)
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value for '{key}': {value!r}. Using default {default}.")
        return default
    if seconds < 0:
        logger.warning(f"Negative value for '{key}': {seconds}. Using default {default}.")
        return default
    return seconds


def get_cache_settings() -> CacheSettings:
    """Builds CacheSettings from the layered configuration."""
    defaults = CacheSettings()
    return CacheSettings(
        default_ttl_seconds=_get_seconds('cache.default_ttl_seconds', defaults.default_ttl_seconds),
        profile_ttl_seconds=_get_seconds('cache.profile_ttl_seconds', defaults.profile_ttl_seconds),
        insights_ttl_seconds=_get_seconds('cache.insights_ttl_seconds', defaults.insights_ttl_seconds),
        comparison_ttl_seconds=_get_seconds('cache.comparison_ttl_seconds', defaults.comparison_ttl_seconds),
        sweep_interval_seconds=_get_seconds('cache.sweep_interval_seconds', defaults.sweep_interval_seconds),
    )


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
