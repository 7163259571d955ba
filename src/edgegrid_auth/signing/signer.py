"""EG1-HMAC-SHA256 Authorization header signing."""

from __future__ import annotations

import base64
import hashlib
import hmac

from edgegrid_auth.common.errors import SigningError
from edgegrid_auth.common.logging import get_logger
from edgegrid_auth.signing.canonical import canonicalize
from edgegrid_auth.signing.models import Credential, SignableRequest
from edgegrid_auth.signing.nonce import Clock, SystemClock

logger = get_logger(__name__)

ALGORITHM = "EG1-HMAC-SHA256"


def build_preamble(credential: Credential, timestamp: str, nonce: str) -> str:
    """Header value up to and including the ``;`` before ``signature=``."""
    return (
        f"{ALGORITHM} "
        f"client_token={credential.client_token};"
        f"access_token={credential.access_token};"
        f"timestamp={timestamp};"
        f"nonce={nonce};"
    )


def derive_signing_key(client_secret: str, timestamp: str) -> bytes:
    """Raw HMAC-SHA256 of the timestamp keyed with the client secret."""
    return hmac.new(
        client_secret.encode("utf-8"),
        timestamp.encode("utf-8"),
        hashlib.sha256,
    ).digest()


def compute_signature(data_to_sign: str, preamble: str, signing_key: bytes) -> str:
    """Base64 HMAC-SHA256 over the canonical data followed by the preamble."""
    message = f"{data_to_sign}\t{preamble}".encode("utf-8")
    digest = hmac.new(signing_key, message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign(
    request: SignableRequest,
    credential: Credential,
    timestamp: str,
    nonce: str,
) -> str:
    """
    Produce the Authorization header value for a request.

    Pure function of its arguments: the same inputs always give the same
    header. Callers must pass a fresh timestamp and nonce for every request.

    Args:
        request: The outbound request
        credential: API client credential
        timestamp: EdgeGrid timestamp (``yyyyMMddTHH:mm:ss+0000``)
        nonce: Single-use random token

    Returns:
        ``EG1-HMAC-SHA256 client_token=...;signature=<base64>``

    Raises:
        InvalidCredential: If a required credential field is empty
        InvalidRequest: If the request has no method or path
        EncodingError: If the body cannot be read as bytes
    """
    credential.validate()
    if not timestamp or not nonce:
        raise SigningError("timestamp and nonce are required")

    preamble = build_preamble(credential, timestamp, nonce)
    data_to_sign = canonicalize(request, credential)
    signature = compute_signature(
        data_to_sign,
        preamble,
        derive_signing_key(credential.client_secret, timestamp),
    )

    logger.debug(
        "Signed request",
        method=request.method.upper(),
        host=request.host,
        path=request.path,
        timestamp=timestamp,
    )
    return f"{preamble}signature={signature}"


def sign_request(
    request: SignableRequest,
    credential: Credential,
    clock: Clock | None = None,
) -> str:
    """Sign with a timestamp and nonce drawn from ``clock`` for this call only."""
    clock = clock or SystemClock()
    return sign(request, credential, clock.timestamp(), clock.nonce())
