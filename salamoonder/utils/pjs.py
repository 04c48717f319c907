"""
Page Script Locator
Finds the Kasada p.js script referenced by a page, for use as KasadaOptions.pjs
"""

import asyncio
import logging
import re
from typing import Optional

import aiohttp

from ..core.config import LocatorConfig
from ..core.errors import NotFound, TransportError, TransportTimeout

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = LocatorConfig.timeout

# <script ... src=".../p.js">, optionally with a query string; the src value
# may be double-quoted, single-quoted or bare.
PJS_PATTERN = re.compile(
    r"""<script\b[^>]*?\bsrc\s*=\s*(?:"(?P<dq>[^"<>]*?/p\.js(?:\?[^"<>]*)?)"|'(?P<sq>[^'<>]*?/p\.js(?:\?[^'<>]*)?)'|(?P<bare>[^\s"'<>]*?/p\.js(?:\?[^\s"'<>]*)?)(?=[\s>]))""",
    re.IGNORECASE,
)


def extract_pjs(html: str) -> str:
    """
    Return the first p.js script URL in an HTML document.

    Raises:
        NotFound: No script tag references a p.js file
    """
    match = PJS_PATTERN.search(html)
    if match is None:
        raise NotFound("p.js script src not found")
    return match.group("dq") or match.group("sq") or match.group("bare")


async def find_pjs(
    page_url: str,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Fetch a page and return the first script src that ends with "/p.js".

    Args:
        page_url: Page to scan
        session: Optional aiohttp session to reuse
        timeout: Total timeout for the page fetch, in seconds
            (DEFAULT_TIMEOUT when omitted)

    Raises:
        TransportTimeout: The page did not load within timeout
        TransportError: Connection failure or non-200 status
        NotFound: The page references no p.js script
    """
    if timeout is None:
        timeout = DEFAULT_TIMEOUT

    owned = session is None
    if owned:
        session = aiohttp.ClientSession()

    try:
        async with session.get(page_url, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
            if response.status != 200:
                raise TransportError(f"unexpected status: {response.status}", status=response.status)
            body = await response.text(errors="replace")
    except asyncio.TimeoutError as e:
        raise TransportTimeout(f"GET {page_url} timed out") from e
    except aiohttp.ClientError as e:
        raise TransportError(f"GET {page_url} failed: {e}") from e
    finally:
        if owned:
            await session.close()

    pjs = extract_pjs(body)
    logger.debug(f"Found p.js for {page_url}: {pjs}")
    return pjs
