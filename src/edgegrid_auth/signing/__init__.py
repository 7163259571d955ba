"""EG1-HMAC-SHA256 canonicalization, signing and verification."""

from edgegrid_auth.signing.canonical import canonicalize
from edgegrid_auth.signing.models import Credential, SignableRequest
from edgegrid_auth.signing.nonce import FixedClock, SystemClock
from edgegrid_auth.signing.signer import sign, sign_request
from edgegrid_auth.signing.verify import parse_authorization, verify_authorization

__all__ = [
    "Credential",
    "SignableRequest",
    "FixedClock",
    "SystemClock",
    "canonicalize",
    "sign",
    "sign_request",
    "parse_authorization",
    "verify_authorization",
]
