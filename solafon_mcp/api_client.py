"""
Solafon REST API client.

Translates one typed proxy request into exactly one outbound HTTP call
and hands the decoded JSON body back unmodified. The Solafon API already
defines its own envelopes ({"ok", "error_code", "description"} for the
Bot API, {"data"} / {"error"} elsewhere); this module does not interpret
them, and HTTP status codes are never raised on.

Failure contract:
    Transport errors (httpx.RequestError) and undecodable bodies
    (ValueError) propagate to the caller of the single invocation.
    There is no retry and no caching.

The wire format is fixed by the remote service:
    - URL is the configured base URL with the path appended verbatim
    - Authorization: Bearer <token>, omitted when no token is available
    - Content-Type: application/json on every request
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from solafon_mcp.config import ConnectorSettings

logger = logging.getLogger("solafon_mcp.api")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# Only these methods carry a request body; GET/DELETE never do.
BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})


class ProxyRequest(BaseModel):
    """A single pass-through call, validated before it leaves the process."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str = Field(description="API path appended to the base URL, e.g. /bot/getMe")
    body: Optional[Dict[str, Any]] = None
    token: Optional[str] = Field(default=None, repr=False)


class HealthStatus(BaseModel):
    """Outcome of the service health probe."""

    online: bool
    status_code: Optional[int] = None
    body: Any = None
    error: Optional[str] = None


class SolafonApiClient:
    """
    Pass-through client for the Solafon API.

    The httpx.AsyncClient is shared across invocations for connection
    pooling. Redirects are followed on every call. The per-request timeout
    comes from settings; None (the default) waits indefinitely, which
    long-polling endpoints such as /bot/getUpdates rely on.
    """

    def __init__(
        self,
        settings: ConnectorSettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = settings.api_url
        self._health_url = settings.health_url
        self._default_token = settings.default_token
        self._timeout = settings.http_timeout
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(follow_redirects=True, timeout=self._timeout)
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_headers(self, token: Optional[str] = None) -> Dict[str, str]:
        """
        Headers for one request.

        An explicit token wins over the configured default. An empty
        string counts as "not supplied" and falls back as well.
        """
        headers = {"Content-Type": "application/json"}
        auth_token = token or self._default_token
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        return headers

    async def request(
        self,
        method: Union[HttpMethod, str],
        path: str,
        body: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Any:
        return await self.send(
            ProxyRequest(method=method, path=path, body=body, token=token)
        )

    async def send(self, proxy_request: ProxyRequest) -> Any:
        method = proxy_request.method
        url = f"{self._base_url}{proxy_request.path}"

        kwargs: Dict[str, Any] = {
            "headers": self.build_headers(proxy_request.token),
        }
        if proxy_request.body is not None and method in BODY_METHODS:
            kwargs["json"] = proxy_request.body

        logger.info("proxy: %s %s", method.value, proxy_request.path)

        try:
            response = await self._http.request(
                method.value,
                url,
                follow_redirects=True,
                timeout=self._timeout,
                **kwargs,
            )
        except httpx.RequestError as exc:
            logger.error(
                "proxy: %s %s connection error: %s",
                method.value,
                proxy_request.path,
                exc,
            )
            raise

        logger.debug(
            "proxy: %s %s -> HTTP %s",
            method.value,
            proxy_request.path,
            response.status_code,
        )

        try:
            return response.json()
        except ValueError:
            logger.error(
                "proxy: %s %s returned a non-JSON body (HTTP %s): %s",
                method.value,
                proxy_request.path,
                response.status_code,
                response.text[:200],
            )
            raise

    async def health_check(self) -> HealthStatus:
        """
        Probe the service's /health endpoint.

        Unlike proxy calls this recovers locally: an unreachable or
        misbehaving service is a valid answer to "is it online?".
        """
        logger.info("health: GET %s", self._health_url)
        try:
            response = await self._http.get(
                self._health_url,
                follow_redirects=True,
                timeout=self._timeout,
            )
            body = response.json()
        except httpx.HTTPError as exc:
            logger.warning("health: service unreachable: %s", exc)
            return HealthStatus(online=False, error=str(exc) or type(exc).__name__)
        except ValueError as exc:
            logger.warning("health: undecodable response: %s", exc)
            return HealthStatus(online=False, error=str(exc))

        return HealthStatus(
            online=response.is_success,
            status_code=response.status_code,
            body=body,
        )

    async def aclose(self) -> None:
        await self._http.aclose()
