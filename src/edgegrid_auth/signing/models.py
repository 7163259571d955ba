"""Credential and request types consumed by the signer."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from edgegrid_auth.common.errors import InvalidCredential

DEFAULT_MAX_BODY_SIZE = 131072

Body = bytes | bytearray | memoryview | str


@dataclass(frozen=True)
class Credential:
    """
    One EdgeGrid API client credential.

    ``headers_to_sign`` is kept in configured order; the canonical header
    segment follows that order, not the order of the request's headers.
    """

    client_token: str
    client_secret: str = field(repr=False)
    access_token: str
    host: str = ""
    max_body_size: int = DEFAULT_MAX_BODY_SIZE
    headers_to_sign: tuple[str, ...] = ()
    account_key: str | None = None

    def __post_init__(self) -> None:
        headers = self.headers_to_sign
        if headers is None:
            headers = ()
        elif isinstance(headers, str):
            headers = (headers,)
        object.__setattr__(self, "headers_to_sign", tuple(headers))

    def validate(self) -> None:
        """
        Check the fields every signing call depends on.

        Raises:
            InvalidCredential: If a token or the secret is empty, or the
                body limit is negative
        """
        for name in ("client_token", "client_secret", "access_token"):
            if not getattr(self, name):
                raise InvalidCredential(f"credential field {name!r} is empty")
        if self.max_body_size < 0:
            raise InvalidCredential("credential field 'max_body_size' must not be negative")

    @property
    def base_url(self) -> str:
        """HTTPS base URL of the API host."""
        host = self.host.rstrip("/")
        if "://" in host:
            return host
        return f"https://{host}"


@dataclass(frozen=True)
class SignableRequest:
    """An outbound HTTP request as seen by the signer."""

    method: str
    scheme: str
    host: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Body | None = None

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: Body | None = None,
    ) -> SignableRequest:
        """
        Build a request from an absolute URL.

        The query string stays attached to the path. An empty path becomes "/".
        """
        parts = urlsplit(url)
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        return cls(
            method=method,
            scheme=parts.scheme,
            host=parts.netloc,
            path=path,
            headers=dict(headers or {}),
            body=body,
        )

    def get_header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None
