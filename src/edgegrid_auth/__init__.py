"""
edgegrid-auth: EG1-HMAC-SHA256 request signing for EdgeGrid APIs.

Builds the ``Authorization`` header an EdgeGrid API gateway recomputes and
verifies, plus a credential loader and a signed aiohttp client around it.
"""

__version__ = "1.0.0"

from edgegrid_auth.signing import (
    Credential,
    SignableRequest,
    canonicalize,
    sign,
    sign_request,
    verify_authorization,
)

__all__ = [
    "Credential",
    "SignableRequest",
    "canonicalize",
    "sign",
    "sign_request",
    "verify_authorization",
]
