from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from wikibulk import __version__
from wikibulk.core import queries
from wikibulk.core.config import Settings
from wikibulk.core.errors import BackendContractError, TransportError

USER_AGENT = f"wikibulk/{__version__}"

logger = logging.getLogger("wikibulk")


class WikiJSClient:
    """Authenticated GraphQL transport for one Wiki.js instance.

    Built once per command and shared by every request in a batch. The
    underlying ``httpx.AsyncClient`` is opened lazily and closed by
    ``aclose()`` or the async context manager.
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        *,
        locale: str = "en",
        http2: bool = False,
        timeout_s: float = 30.0,
        max_concurrency: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint
        self.locale = locale
        self.max_concurrency = max_concurrency
        self._token = token
        self._http2 = http2
        self._timeout_s = timeout_s
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "WikiJSClient":
        return cls(
            settings.endpoint,
            settings.api_key,
            locale=settings.locale,
            http2=settings.http2,
            timeout_s=settings.timeout_s,
            max_concurrency=settings.max_concurrency,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "WikiJSClient":
        return cls.from_settings(Settings.from_env(), **kwargs)

    @property
    def http(self) -> httpx.AsyncClient:
        if self._client is None:
            # no pool limit or pool wait timeout: max_concurrency is the only cap
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": USER_AGENT,
                },
                timeout=httpx.Timeout(self._timeout_s, pool=None),
                limits=httpx.Limits(max_connections=None, max_keepalive_connections=None),
                http2=self._http2,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "WikiJSClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def post(self, body: dict[str, Any]) -> httpx.Response:
        """Send one GraphQL body. Raises ``httpx.HTTPError`` on network or HTTP failure."""
        resp = await self.http.post(self.endpoint, json=body)
        resp.raise_for_status()
        return resp

    async def query(self, body: dict[str, Any]) -> dict[str, Any]:
        """Single request/response round trip with errors mapped to the engine taxonomy."""
        try:
            resp = await self.post(body)
        except httpx.HTTPError as e:
            raise TransportError(f"Network error talking to Wiki.js: {e}") from e
        try:
            data = resp.json()
        except ValueError as e:
            raise BackendContractError(f"Wiki.js reply is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise BackendContractError("Wiki.js reply is not a JSON object")
        errors = queries.graphql_errors(data)
        if errors:
            logger.warning(json.dumps({"msg": "graphql_errors", "errors": errors}))
        return data

    async def get_wiki_title(self) -> str:
        data = await self.query(queries.site_title_body())
        title = queries.read_site_title(data)
        if title is None:
            errors = queries.graphql_errors(data)
            detail = f": {errors[0]}" if errors else ""
            raise BackendContractError(f"No site title in response{detail}")
        return title
