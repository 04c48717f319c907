"""
Salamoonder Client
==================

Typed facade over the two generic endpoints of the task API.

    async with Salamoonder(api_key) as client:
        task_id = await client.create_kasada_task(KasadaOptions(pjs=pjs_url))
        try:
            solution = await client.get_kasada_result(task_id)
        except NotReady:
            ...  # poll again later

create:  options -> registry tag -> envelope -> POST /createTask -> task id
fetch:   task id -> POST /getTaskResult -> classification -> solution

The client keeps only immutable settings and a transport handle, so one
instance can be shared between concurrent tasks. It never retries, backs
off or polls on its own.
"""

import logging
import warnings
from decimal import Decimal
from typing import Any, Optional, Type

import aiohttp
from pydantic import ValidationError

from ..api.envelopes import BalanceResponse, CreateTaskResponse, TaskResultResponse
from ..api.transport import Transport
from ..tasks.builder import build_create_request
from ..tasks.models import (
    TaskVariant,
    TaskOptions,
    TaskSolution,
    BalanceOptions,
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
)
from ..tasks.poller import fetch_result, project, decode_balance
from ..tasks.registry import spec_for, variant_of
from .config import Config, DEFAULT_BASE_URL, get_config
from .errors import ConfigError, DecodeError, ServerError, UnsupportedVariant

logger = logging.getLogger(__name__)

CREATE_PATH = "/createTask"


def _deprecation_message(variant: TaskVariant) -> str:
    return f"{spec_for(variant).options.__name__} is deprecated and may be rejected by the service"


class Salamoonder:
    """Async client for the Salamoonder task API"""

    def __init__(
        self,
        api_key: str,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        """
        Args:
            api_key: Account credential sent with every request
            session: Optional shared aiohttp session (left open on close)
            base_url: API root
            timeout: Default per-request timeout in seconds

        Raises:
            ConfigError: api_key is empty
        """
        if not api_key:
            raise ConfigError("no api key")

        self._api_key = api_key
        self._transport = Transport(base_url, session=session, timeout=timeout)

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "Salamoonder":
        """Create a client from loaded configuration (global config by default)"""
        config = config or get_config()
        return cls(
            config.api.api_key,
            session=session,
            base_url=config.api.base_url,
            timeout=config.api.timeout,
        )

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "Salamoonder":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # =========================================================================
    # GENERIC PROTOCOL
    # =========================================================================

    async def _post_create(self, variant: TaskVariant, options: TaskOptions, timeout: Optional[float]) -> dict:
        spec = spec_for(variant)
        request = build_create_request(self._api_key, spec.tag, options)
        logger.debug(f"Creating {spec.tag} task")
        return await self._transport.post_json(CREATE_PATH, request.model_dump(), timeout=timeout)

    async def _create(self, variant: TaskVariant, options: TaskOptions, timeout: Optional[float]) -> str:
        data = await self._post_create(variant, options, timeout)

        try:
            response = CreateTaskResponse.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"decode create response: {e}") from e

        if not response.ok:
            logger.warning(f"createTask rejected: {response.error_code} {response.error_description}")
            raise ServerError(response.error_code, response.error_description or "")

        if not response.task_id:
            raise DecodeError("create response has no taskId")

        logger.info(f"Created {spec_for(variant).tag} task {response.task_id}")
        return response.task_id

    async def create_task(self, options: TaskOptions, timeout: Optional[float] = None) -> str:
        """
        Create a task of whichever variant the option record belongs to.

        Returns:
            The task id to poll with get_task_result

        Raises:
            UnsupportedVariant: options is not a known option record
            ServerError: The service refused the task
        """
        variant = variant_of(options)
        if spec_for(variant).deprecated:
            warnings.warn(_deprecation_message(variant), DeprecationWarning, stacklevel=2)
        return await self._create(variant, options, timeout)

    async def get_task_result(
        self,
        variant: TaskVariant,
        task_id: str,
        solution_model: Optional[Type[TaskSolution]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Fetch and decode the result of a task once.

        Raises:
            NotReady: The task is still running; call again later
            TaskError: The service reported a failure for this task
            DecodeError: The solution does not match the variant's shape
        """
        spec_for(variant)
        envelope = await fetch_result(self._transport, self._api_key, task_id, timeout=timeout)
        return project(envelope, variant, task_id=task_id, solution_model=solution_model)

    async def get_raw_task_result(self, task_id: str, timeout: Optional[float] = None) -> TaskResultResponse:
        """Fetch the result envelope without readiness checks or decoding"""
        return await fetch_result(self._transport, self._api_key, task_id, timeout=timeout)

    def _require_options(self, variant: TaskVariant, options: Any) -> None:
        if type(options) is not spec_for(variant).options:
            raise UnsupportedVariant(options)

    async def _create_typed(self, variant: TaskVariant, options: Any, timeout: Optional[float]) -> str:
        self._require_options(variant, options)
        return await self._create(variant, options, timeout)

    # =========================================================================
    # PER-VARIANT OPERATIONS
    # =========================================================================

    async def create_kasada_task(self, options: KasadaOptions, timeout: Optional[float] = None) -> str:
        return await self._create_typed(TaskVariant.KASADA, options, timeout)

    async def get_kasada_result(self, task_id: str, timeout: Optional[float] = None) -> KasadaSolution:
        return await self.get_task_result(TaskVariant.KASADA, task_id, timeout=timeout)

    async def create_reese84_task(self, options: Reese84Options, timeout: Optional[float] = None) -> str:
        return await self._create_typed(TaskVariant.REESE84, options, timeout)

    async def get_reese84_result(
        self,
        task_id: str,
        submit_payload: bool = False,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Fetch a Reese84 result.

        Pass the same submit_payload the task was created with: the service
        answers with a token (Reese84SubmitPayloadSolution) when it is True
        and with the raw payload (Reese84Solution) otherwise.
        """
        model = Reese84SubmitPayloadSolution if submit_payload else Reese84Solution
        return await self.get_task_result(TaskVariant.REESE84, task_id, solution_model=model, timeout=timeout)

    async def create_utmvc_task(self, options: UtmvcOptions, timeout: Optional[float] = None) -> str:
        return await self._create_typed(TaskVariant.UTMVC, options, timeout)

    async def get_utmvc_result(self, task_id: str, timeout: Optional[float] = None) -> UtmvcSolution:
        return await self.get_task_result(TaskVariant.UTMVC, task_id, timeout=timeout)

    async def create_twitch_scraper_task(
        self,
        options: Optional[TwitchScraperOptions] = None,
        timeout: Optional[float] = None,
    ) -> str:
        return await self._create_typed(TaskVariant.TWITCH_SCRAPER, options or TwitchScraperOptions(), timeout)

    async def get_twitch_scraper_result(self, task_id: str, timeout: Optional[float] = None) -> TwitchScraperSolution:
        return await self.get_task_result(TaskVariant.TWITCH_SCRAPER, task_id, timeout=timeout)

    async def create_twitch_integrity_task(self, options: TwitchIntegrityOptions, timeout: Optional[float] = None) -> str:
        return await self._create_typed(TaskVariant.TWITCH_INTEGRITY, options, timeout)

    async def get_twitch_integrity_result(self, task_id: str, timeout: Optional[float] = None) -> TwitchIntegritySolution:
        return await self.get_task_result(TaskVariant.TWITCH_INTEGRITY, task_id, timeout=timeout)

    async def create_twitch_public_integrity_task(
        self,
        options: TwitchPublicIntegrityOptions,
        timeout: Optional[float] = None,
    ) -> str:
        """Deprecated: use create_twitch_integrity_task"""
        self._require_options(TaskVariant.TWITCH_PUBLIC_INTEGRITY, options)
        warnings.warn(_deprecation_message(TaskVariant.TWITCH_PUBLIC_INTEGRITY), DeprecationWarning, stacklevel=2)
        return await self._create(TaskVariant.TWITCH_PUBLIC_INTEGRITY, options, timeout)

    async def get_twitch_public_integrity_result(
        self,
        task_id: str,
        timeout: Optional[float] = None,
    ) -> TwitchPublicIntegritySolution:
        return await self.get_task_result(TaskVariant.TWITCH_PUBLIC_INTEGRITY, task_id, timeout=timeout)

    async def create_twitch_local_integrity_task(
        self,
        options: TwitchLocalIntegrityOptions,
        timeout: Optional[float] = None,
    ) -> str:
        """Deprecated: the service no longer needs a local integrity token"""
        self._require_options(TaskVariant.TWITCH_LOCAL_INTEGRITY, options)
        warnings.warn(_deprecation_message(TaskVariant.TWITCH_LOCAL_INTEGRITY), DeprecationWarning, stacklevel=2)
        return await self._create(TaskVariant.TWITCH_LOCAL_INTEGRITY, options, timeout)

    async def get_twitch_local_integrity_result(
        self,
        task_id: str,
        timeout: Optional[float] = None,
    ) -> TwitchLocalIntegritySolution:
        return await self.get_task_result(TaskVariant.TWITCH_LOCAL_INTEGRITY, task_id, timeout=timeout)

    # =========================================================================
    # BALANCE
    # =========================================================================

    async def get_balance(self, timeout: Optional[float] = None) -> Decimal:
        """
        One-call balance query: the create response carries the wallet
        amount directly.

        Raises:
            ServerError: The service rejected the request
            DecodeError: wallet is missing or not a decimal string
        """
        data = await self._post_create(TaskVariant.BALANCE, BalanceOptions(), timeout)

        try:
            response = BalanceResponse.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"decode balance response: {e}") from e

        if not response.ok:
            logger.warning(f"getBalance rejected: {response.error_code} {response.error_description}")
            raise ServerError(response.error_code, response.error_description or "")

        return decode_balance(response.wallet)

    async def create_balance_task(self, timeout: Optional[float] = None) -> str:
        """Two-call balance protocol, for deployments that answer with a task id"""
        return await self._create(TaskVariant.BALANCE, BalanceOptions(), timeout)

    async def get_balance_result(self, task_id: str, timeout: Optional[float] = None) -> Decimal:
        return await self.get_task_result(TaskVariant.BALANCE, task_id, timeout=timeout)
