"""
Centralized Configuration Module
Loads settings from config.yaml and environment variables
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Union
from pathlib import Path

from .errors import ConfigError


DEFAULT_BASE_URL = "https://salamoonder.com/api"
LOG_FORMATS = ("standard", "json")


@dataclass
class ApiConfig:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0  # seconds, per request


@dataclass
class LocatorConfig:
    timeout: float = 15.0


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "standard"  # standard | json
    file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class"""
    api: ApiConfig = field(default_factory=ApiConfig)
    locator: LocatorConfig = field(default_factory=LocatorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    'api': ApiConfig,
    'locator': LocatorConfig,
    'logging': LoggingConfig,
}


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _require_timeout(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{name} must be a positive number, got {value!r}")


def _require_str(name: str, value) -> None:
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string, got {value!r}")


def _validate(config: Config) -> None:
    """Reject values the dataclasses accepted but the client cannot use"""
    _require_str("api.api_key", config.api.api_key)
    _require_str("api.base_url", config.api.base_url)
    if not config.api.base_url:
        raise ConfigError("api.base_url must not be empty")
    _require_timeout("api.timeout", config.api.timeout)
    _require_timeout("locator.timeout", config.locator.timeout)
    _require_str("logging.level", config.logging.level)
    if config.logging.format not in LOG_FORMATS:
        raise ConfigError(
            f"logging.format must be one of {', '.join(LOG_FORMATS)}, got {config.logging.format!r}"
        )
    if config.logging.file is not None:
        _require_str("logging.file", config.logging.file)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from YAML file and environment variables.
    Environment variables override YAML settings.

    Args:
        config_path: Explicit YAML file. Falls back to $SALAMOONDER_CONFIG,
            then ./config.yaml. A missing file just means defaults.

    Raises:
        ConfigError: The file is not a mapping, has unknown sections or keys,
            or a value (from the file or the environment) is malformed.
    """
    config = Config()

    # Determine config file path
    if config_path is None:
        env_path = os.environ.get("SALAMOONDER_CONFIG")
        config_path = env_path if env_path else Path.cwd() / "config.yaml"

    config_path_str = str(config_path)

    if os.path.exists(config_path_str):
        with open(config_path_str, 'r') as f:
            try:
                yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Cannot parse {config_path_str}: {e}") from e

        if yaml_config:
            if not isinstance(yaml_config, dict):
                raise ConfigError(f"{config_path_str} must contain a mapping")

            unknown = sorted(str(key) for key in yaml_config if key not in _SECTIONS)
            if unknown:
                raise ConfigError(f"Unknown section(s) in {config_path_str}: {', '.join(unknown)}")

            for section, section_cls in _SECTIONS.items():
                if section not in yaml_config:
                    continue
                try:
                    setattr(config, section, section_cls(**(yaml_config[section] or {})))
                except TypeError as e:
                    raise ConfigError(f"Invalid '{section}' section in {config_path_str}: {e}") from e

    # Override with environment variables
    if os.environ.get('SALAMOONDER_API_KEY'):
        config.api.api_key = os.environ['SALAMOONDER_API_KEY']
    if os.environ.get('SALAMOONDER_BASE_URL'):
        config.api.base_url = os.environ['SALAMOONDER_BASE_URL']
    timeout = _env_float('SALAMOONDER_TIMEOUT')
    if timeout is not None:
        config.api.timeout = timeout
    if os.environ.get('SALAMOONDER_LOG_LEVEL'):
        config.logging.level = os.environ['SALAMOONDER_LOG_LEVEL']

    _validate(config)
    return config


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """Reload configuration from file"""
    global _config
    _config = load_config(config_path)
    return _config
