"""
HTTP Transport
==============

JSON-over-POST against the task API using aiohttp.

The transport either borrows a caller-supplied aiohttp.ClientSession or
lazily creates its own; only an owned session is closed by close().
Every call is a single request with its own timeout. There is no retry:
failures surface as TransportError / TransportTimeout / DecodeError.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from ..core.errors import TransportError, TransportTimeout, DecodeError

logger = logging.getLogger(__name__)


class Transport:
    """Posts JSON bodies to paths under a base URL"""

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
    ):
        """
        Args:
            base_url: API root, e.g. https://salamoonder.com/api
            session: Shared aiohttp session; created on first use if omitted
            timeout: Default total timeout per request, in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def post_json(
        self,
        path: str,
        payload: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        POST payload as JSON and return the decoded JSON object.

        Args:
            path: Endpoint path, e.g. "/createTask"
            payload: JSON-serializable request body
            timeout: Overrides the default timeout for this call

        Raises:
            TransportTimeout: The request exceeded its timeout
            TransportError: Connection failure or HTTP status other than 200
            DecodeError: The body is not a JSON object
        """
        url = f"{self.base_url}{path}"
        client_timeout = aiohttp.ClientTimeout(total=timeout if timeout is not None else self.timeout)

        logger.debug(f"POST {path}")
        try:
            async with self._get_session().post(url, json=payload, timeout=client_timeout) as response:
                body = await response.text()
                if response.status != 200:
                    raise TransportError(
                        f"unexpected status {response.status}: {body}",
                        status=response.status,
                    )
        except asyncio.TimeoutError as e:
            raise TransportTimeout(f"POST {path} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"POST {path} failed: {e}") from e

        try:
            data = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"decode response: {e}") from e

        if not isinstance(data, dict):
            raise DecodeError(f"decode response: expected a JSON object, got {type(data).__name__}")

        return data

    async def close(self) -> None:
        """Close the session if this transport created it"""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
