"""
Core module initialization
"""

from .config import Config, get_config, load_config, reload_config
from .errors import (
    SalamoonderError,
    ConfigError,
    TransportError,
    TransportTimeout,
    ServerError,
    TaskError,
    NotReady,
    DecodeError,
    UnsupportedVariant,
    NotFound,
)

__all__ = [
    'Config',
    'get_config',
    'load_config',
    'reload_config',
    'SalamoonderError',
    'ConfigError',
    'TransportError',
    'TransportTimeout',
    'ServerError',
    'TaskError',
    'NotReady',
    'DecodeError',
    'UnsupportedVariant',
    'NotFound',
]
