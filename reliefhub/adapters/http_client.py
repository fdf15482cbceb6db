"""
Shared HTTP plumbing for ReliefHub provider adapters.

Adapters share one aiohttp session owned by the application and turn
every transport, status or decoding failure into a ProviderError.
"""

import asyncio
from typing import Any, Dict, Optional
import aiohttp
from reliefhub.core.errors import ProviderError


class HttpAdapter:
    """Base class for adapters that call one external HTTP API"""

    name = "http"

    def __init__(self, session: aiohttp.ClientSession, timeout_sec: float):
        """
        Initializes the adapter.

        Args:
            session: shared aiohttp session
            timeout_sec: total timeout for one request
        """
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout_sec)

    async def _request(self, url: str, *, params: Optional[Dict[str, Any]] = None,
                       headers: Optional[Dict[str, str]] = None, as_json: bool = True) -> Any:
        """
        Performs a GET request.

        Args:
            url: request URL
            params: query parameters
            headers: extra request headers
            as_json: decode the body as JSON, otherwise return text

        Returns:
            decoded body

        Raises:
            ProviderError: on transport error, non-200 status or undecodable body
        """
        try:
            async with self.session.get(url, params=params, headers=headers, timeout=self.timeout) as response:
                if response.status != 200:
                    body = await response.text()
                    raise ProviderError(self.name, f"HTTP {response.status}: {body[:200]}")
                if as_json:
                    return await response.json(content_type=None)
                return await response.text()
        except asyncio.TimeoutError as e:
            raise ProviderError(self.name, "timed out") from e
        except (aiohttp.ClientError, ValueError) as e:
            raise ProviderError(self.name, f"{type(e).__name__}: {e}") from e
