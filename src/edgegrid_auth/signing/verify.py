"""Gateway-side parsing and verification of EG1-HMAC-SHA256 headers."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from edgegrid_auth.common.errors import InvalidAuthorization
from edgegrid_auth.common.logging import get_logger
from edgegrid_auth.signing.models import Credential, SignableRequest
from edgegrid_auth.signing.nonce import parse_timestamp
from edgegrid_auth.signing.signer import ALGORITHM, sign

logger = get_logger(__name__)

_REQUIRED_FIELDS = ("client_token", "access_token", "timestamp", "nonce", "signature")


def _matches(received: str, expected: str) -> bool:
    """Constant-time comparison that accepts non-ASCII text."""
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8"))


@dataclass(frozen=True)
class ParsedAuthorization:
    """Fields carried by a signed Authorization header."""

    client_token: str
    access_token: str
    timestamp: str
    nonce: str
    signature: str


def parse_authorization(header: str) -> ParsedAuthorization:
    """
    Split an Authorization header into its fields.

    Raises:
        InvalidAuthorization: On a different scheme or a missing field
    """
    scheme, _, params = header.strip().partition(" ")
    if scheme != ALGORITHM:
        raise InvalidAuthorization(f"Unsupported authorization scheme: {scheme!r}")

    fields: dict[str, str] = {}
    for item in params.split(";"):
        if not item:
            continue
        # base64 signatures end in "=", split on the first one only
        key, sep, value = item.partition("=")
        if not sep:
            raise InvalidAuthorization(f"Malformed authorization field: {item!r}")
        fields[key.strip()] = value

    missing = [name for name in _REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        raise InvalidAuthorization(f"Authorization header is missing: {', '.join(missing)}")

    return ParsedAuthorization(**{name: fields[name] for name in _REQUIRED_FIELDS})


def verify_authorization(
    header: str,
    request: SignableRequest,
    credential: Credential,
    *,
    max_skew: timedelta | None = None,
    now: datetime | None = None,
) -> bool:
    """
    Recompute a request's signature and compare it in constant time.

    Args:
        header: Authorization header value received with the request
        request: The request as received
        credential: Credential the client claims to use
        max_skew: If set, reject timestamps further than this from ``now``
        now: Reference time for the skew check (defaults to current UTC)

    Returns:
        True if the header was produced by ``credential`` for ``request``

    Raises:
        InvalidAuthorization: If the header cannot be parsed
    """
    parsed = parse_authorization(header)

    if not (
        _matches(parsed.client_token, credential.client_token)
        and _matches(parsed.access_token, credential.access_token)
    ):
        logger.warning("Authorization tokens do not match credential")
        return False

    if max_skew is not None:
        try:
            signed_at = parse_timestamp(parsed.timestamp)
        except ValueError as e:
            raise InvalidAuthorization(f"Invalid timestamp: {parsed.timestamp!r}") from e
        if now is None:
            reference = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            reference = now.replace(tzinfo=timezone.utc)
        else:
            reference = now.astimezone(timezone.utc)
        if abs(reference - signed_at) > max_skew:
            logger.warning(
                "Authorization timestamp outside allowed skew",
                timestamp=parsed.timestamp,
                max_skew_seconds=max_skew.total_seconds(),
            )
            return False

    expected = sign(request, credential, parsed.timestamp, parsed.nonce)
    if not _matches(expected, header.strip()):
        logger.warning("Authorization signature verification failed")
        return False
    return True
