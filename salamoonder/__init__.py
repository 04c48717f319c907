"""
Salamoonder
===========

Async client for the Salamoonder captcha solving / scraping task API.

    from salamoonder import Salamoonder, KasadaOptions, NotReady, find_pjs

    async with Salamoonder(api_key) as client:
        pjs = await find_pjs("https://www.example.com/")
        task_id = await client.create_kasada_task(KasadaOptions(pjs=pjs))
        solution = await client.get_kasada_result(task_id)  # may raise NotReady
"""

from .core.client import Salamoonder
from .core.config import Config, load_config, get_config, reload_config
from .core.errors import (
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
from .tasks.models import (
    TaskVariant,
    TaskStatus,
    TaskOptions,
    TaskSolution,
    KasadaOptions,
    KasadaSolution,
    Reese84Options,
    Reese84Solution,
    Reese84SubmitPayloadSolution,
    UtmvcOptions,
    UtmvcSolution,
    TwitchScraperOptions,
    TwitchScraperSolution,
    TwitchIntegrityOptions,
    TwitchIntegritySolution,
    TwitchPublicIntegrityOptions,
    TwitchPublicIntegritySolution,
    TwitchLocalIntegrityOptions,
    TwitchLocalIntegritySolution,
    BalanceOptions,
)
from .tasks.registry import resolve
from .utils.pjs import extract_pjs, find_pjs
from .utils.logger import setup_logging

__version__ = "1.0.0"

__all__ = [
    'Salamoonder',
    'Config',
    'load_config',
    'get_config',
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
    'TaskVariant',
    'TaskStatus',
    'TaskOptions',
    'TaskSolution',
    'KasadaOptions',
    'KasadaSolution',
    'Reese84Options',
    'Reese84Solution',
    'Reese84SubmitPayloadSolution',
    'UtmvcOptions',
    'UtmvcSolution',
    'TwitchScraperOptions',
    'TwitchScraperSolution',
    'TwitchIntegrityOptions',
    'TwitchIntegritySolution',
    'TwitchPublicIntegrityOptions',
    'TwitchPublicIntegritySolution',
    'TwitchLocalIntegrityOptions',
    'TwitchLocalIntegritySolution',
    'BalanceOptions',
    'resolve',
    'extract_pjs',
    'find_pjs',
    'setup_logging',
]
