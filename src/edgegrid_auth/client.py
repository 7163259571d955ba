"""Signed HTTP client for EdgeGrid APIs."""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import aiohttp
from yarl import URL

from edgegrid_auth.common.errors import EdgeGridClientError
from edgegrid_auth.common.logging import get_logger
from edgegrid_auth.common.settings import get_settings
from edgegrid_auth.signing.models import Body, Credential, SignableRequest
from edgegrid_auth.signing.nonce import Clock, SystemClock
from edgegrid_auth.signing.signer import sign_request

logger = get_logger(__name__)

USER_AGENT = "edgegrid-auth-python/1.0.0"


class EdgeGridClient:
    """
    aiohttp client that signs every request with one credential.

    The exact bytes sent are the bytes signed: JSON bodies are serialized
    here rather than by aiohttp, and the URL is percent-encoded once by yarl
    and then sent as already encoded.
    """

    def __init__(
        self,
        credential: Credential,
        timeout: float | None = None,
        clock: Clock | None = None,
    ):
        """
        Initialize the client.

        Args:
            credential: Credential used for every request
            timeout: Total request timeout in seconds (defaults to the
                ``http_timeout`` setting)
            clock: Timestamp/nonce source (system clock by default)
        """
        credential.validate()
        self._credential = credential
        self._base_url = credential.base_url
        self._timeout = aiohttp.ClientTimeout(
            total=get_settings().http_timeout if timeout is None else timeout
        )
        self._clock = clock or SystemClock()
        self._session: aiohttp.ClientSession | None = None

    @property
    def credential(self) -> Credential:
        return self._credential

    async def __aenter__(self) -> "EdgeGridClient":
        """Enter async context."""
        self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.close()

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session exists."""
        if not self._session:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    def build_url(self, path: str, params: Mapping[str, Any] | None = None) -> URL:
        """
        Encoded absolute URL for ``path``, with ``accountSwitchKey`` when configured.

        The result is marked as encoded so aiohttp sends it unchanged.
        """
        query: dict[str, Any] = dict(params or {})
        if self._credential.account_key:
            query["accountSwitchKey"] = self._credential.account_key

        url = f"{self._base_url}/{path.lstrip('/')}"
        if query:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(query, doseq=True)}"
        return URL(str(URL(url)), encoded=True)

    def prepare(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        data: Body | None = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> tuple[URL, dict[str, str], bytes | None]:
        """
        Build the URL, headers and body for a request and sign it.

        Returns:
            Tuple of (url, headers including Authorization, body bytes or None)
        """
        url = self.build_url(path, params)
        send_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        send_headers.update(headers or {})

        body: bytes | None = None
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            send_headers.setdefault("Content-Type", "application/json")
        elif data is not None:
            body = data.encode("utf-8") if isinstance(data, str) else bytes(data)

        request = SignableRequest.from_url(method, str(url), headers=send_headers, body=body)
        send_headers["Authorization"] = sign_request(request, self._credential, self._clock)
        return url, send_headers, body

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        data: Body | None = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Sign and send a request, returning the decoded JSON response.

        Raises:
            EdgeGridClientError: On transport failure or a non-2xx response
        """
        url, send_headers, body = self.prepare(
            method,
            path,
            json_body=json_body,
            data=data,
            headers=headers,
            params=params,
        )
        session = self._ensure_session()

        logger.debug("Sending signed request", method=method.upper(), url=str(url))
        try:
            response = await session.request(method.upper(), url, headers=send_headers, data=body)
        except aiohttp.ClientError as e:
            raise EdgeGridClientError(f"Request failed: {e}") from e

        async with response:
            if not 200 <= response.status < 300:
                text = await response.text()
                logger.warning(
                    "EdgeGrid request rejected",
                    method=method.upper(),
                    url=str(url),
                    status=response.status,
                )
                raise EdgeGridClientError(
                    f"{method.upper()} {url} failed: {text}", response.status
                )
            if response.status == 204:
                return None
            return await response.json(content_type=None)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json_body: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json_body=json_body, **kwargs)

    async def put(self, path: str, json_body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, json_body=json_body, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)
