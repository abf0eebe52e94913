"""HTTP client used by toolup for its network requests."""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp

from .version import VERSION

DEFAULT_USER_AGENT = f"toolup/{VERSION}"
DEFAULT_TIMEOUT = 30.0


class HTTPClientError(Exception):
    """Raised when a request completes with a non-success status."""

    def __init__(self, url: str, status: int, reason: Optional[str] = None):
        self.url = url
        self.status = status
        self.reason = reason
        message = f"Request to {url} failed with status {status}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class HTTPRequestExecutor(ABC):
    """Abstract transport that performs the actual requests."""

    @abstractmethod
    async def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        """Fetch a URL and return the response body.

        Args:
            url: Absolute URL to fetch
            headers: Optional extra request headers

        Returns:
            Raw response body

        Raises:
            HTTPClientError: If the server answers with a non-2xx status
        """
        pass

    async def close(self) -> None:
        """Release any held connections. Override if needed."""
        pass


class AiohttpRequestExecutor(HTTPRequestExecutor):
    """Request executor backed by a lazily created aiohttp session."""

    def __init__(
        self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
            )
        return self._session

    async def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        session = self._get_session()
        async with session.get(url, headers=headers) as response:
            if not 200 <= response.status < 300:
                raise HTTPClientError(url, response.status, response.reason)
            return await response.read()

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None


class HTTPClient:
    """Thin client shared by everything that talks to the network."""

    def __init__(self, executor: Optional[HTTPRequestExecutor] = None):
        self.executor = executor or AiohttpRequestExecutor()

    async def get_bytes(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        return await self.executor.get(url, headers=headers)

    async def get_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """Fetch a URL and decode its body as JSON."""
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        body = await self.executor.get(url, headers=request_headers)
        return json.loads(body)

    async def close(self) -> None:
        await self.executor.close()
