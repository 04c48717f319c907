"""
Utils Module
Common utility functions
"""

from .logger import LIBRARY_LOGGER, setup_logging, setup_logging_from_config
from .pjs import extract_pjs, find_pjs

__all__ = ['LIBRARY_LOGGER', 'setup_logging', 'setup_logging_from_config', 'extract_pjs', 'find_pjs']
