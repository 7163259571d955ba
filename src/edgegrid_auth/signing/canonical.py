"""Request canonicalization for EG1-HMAC-SHA256."""

from __future__ import annotations

import base64
import hashlib
import re
from collections.abc import Sequence

from edgegrid_auth.common.errors import EncodingError, InvalidRequest
from edgegrid_auth.common.logging import get_logger
from edgegrid_auth.signing.models import Body, Credential, SignableRequest

logger = get_logger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_header_value(value: str) -> str:
    """Trim a header value and collapse internal whitespace runs to one space."""
    return _WHITESPACE_RUN.sub(" ", value.strip())


def canonicalize_headers(request: SignableRequest, headers_to_sign: Sequence[str]) -> str:
    """
    Build the signed-headers segment.

    Headers are emitted in ``headers_to_sign`` order as ``name:value`` with
    the name lowercased. Headers the request does not carry are skipped.
    """
    entries: list[str] = []
    for name in headers_to_sign:
        value = request.get_header(name)
        if value is None:
            continue
        entries.append(f"{name.lower()}:{normalize_header_value(value)}")
    return "\t".join(entries)


def body_bytes(body: Body | None) -> bytes:
    """Read a request body as bytes."""
    if body is None:
        return b""
    if isinstance(body, str):
        try:
            return body.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingError(f"Request body is not encodable as UTF-8: {e}") from e
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise EncodingError(f"Unsupported request body type: {type(body).__name__}")


def content_hash(request: SignableRequest, max_body_size: int) -> str:
    """
    Base64 SHA-256 of the request body, truncated to ``max_body_size`` bytes.

    Empty unless the method carries a body and the truncated body is non-empty.
    """
    if request.method.upper() not in BODY_METHODS:
        return ""

    data = body_bytes(request.body)
    if len(data) > max_body_size:
        logger.debug(
            "Truncating body for content hash",
            body_length=len(data),
            max_body_size=max_body_size,
        )
        data = data[:max_body_size]
    if not data:
        return ""

    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


def request_line(request: SignableRequest) -> str:
    """Tab-separated method, scheme, host and path (with query)."""
    if not request.method:
        raise InvalidRequest("Request method is required")
    if not request.path:
        raise InvalidRequest("Request path is required")

    return "\t".join(
        [
            request.method.upper(),
            request.scheme.lower(),
            request.host,
            request.path,
        ]
    )


def canonicalize(request: SignableRequest, credential: Credential) -> str:
    """
    Reduce a request to the data to sign.

    Args:
        request: The outbound request
        credential: Supplies ``headers_to_sign`` and ``max_body_size``

    Returns:
        Request line, signed headers and content hash, tab-separated

    Raises:
        InvalidRequest: If the method or path is empty
        EncodingError: If the body cannot be read as bytes
    """
    return "\t".join(
        [
            request_line(request),
            canonicalize_headers(request, credential.headers_to_sign),
            content_hash(request, credential.max_body_size),
        ]
    )
