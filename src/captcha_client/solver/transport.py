"""HTTP transport used by the solver.

The solver only talks to ``ITransport``; ``AiohttpTransport`` is the
production implementation and tests swap in an ``AsyncMock``.
"""

import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Union

import aiohttp
import structlog

from ..errors import ResponseDecodeError, TransportError

logger = structlog.get_logger()

API_URL = "https://api.2captcha.com/"


class Endpoint(str, Enum):
    """API routes, relative to the service's base URL."""

    CREATE_TASK = "createTask"
    GET_TASK_RESULT = "getTaskResult"
    GET_BALANCE = "getBalance"
    REPORT_CORRECT = "reportCorrect"
    REPORT_INCORRECT = "reportIncorrect"


class ITransport(ABC):
    """Interface for the JSON-over-HTTP transport."""

    @abstractmethod
    async def post(self, path: Union[Endpoint, str], body: Dict[str, Any]) -> Dict[str, Any]:
        """POST ``body`` as JSON to ``path`` and return the decoded JSON object.

        Args:
            path: Route relative to the base URL.
            body: JSON-compatible request object.

        Returns:
            The decoded response body.

        Raises:
            TransportError: If the request could not be completed.
            ResponseDecodeError: If the body is not a JSON object.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the connections held by the transport."""
        pass


class AiohttpTransport(ITransport):
    """Transport backed by a single, lazily created ``aiohttp.ClientSession``.

    The session's connection pool is shared by every request, so one
    transport can serve any number of concurrent solver calls.
    """

    def __init__(
            self,
            base_url: str = API_URL,
            timeout: float = 30.0,
            session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the transport.

        Args:
            base_url: Root URL of the API; routes are appended to it.
            timeout: Total timeout of a single request, in seconds.
            session: Session to use instead of creating one. A session passed
                in is not closed by ``close()``.
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None
        self.logger = logger.bind(component="AiohttpTransport")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def post(self, path: Union[Endpoint, str], body: Dict[str, Any]) -> Dict[str, Any]:
        route = path.value if isinstance(path, Endpoint) else path
        url = self.base_url + route
        session = self._get_session()

        self.logger.debug("request_sent", route=route)
        try:
            async with session.post(url, json=body) as response:
                status = response.status
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    raise ResponseDecodeError(
                        f"{route} answered with a non-JSON body (HTTP {status})"
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("request_failed", route=route, error=str(e) or type(e).__name__)
            raise TransportError(f"{route} request failed: {e!r}") from e

        if not isinstance(payload, dict):
            raise ResponseDecodeError(
                f"{route} answered with {type(payload).__name__}, expected a JSON object"
            )
        self.logger.debug("response_received", route=route, status=status)
        return payload

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
