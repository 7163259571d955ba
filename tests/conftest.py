"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from edgegrid_auth.signing.models import Credential, SignableRequest

SAMPLE_EDGERC = """\
[default]
host = akab-default-xxxxxxxx.luna.akamaiapis.net
client_token = akab-client-token-default
client_secret = default-secret=
access_token = akab-access-token-default

[test]
host = akab-test-xxxxxxxx.luna.akamaiapis.net
client_token = akab-client-token-test
client_secret = test%secret=
access_token = akab-access-token-test
max_body = 2048
headers_to_sign = X-Test1, X-Test2
account_key = 1-ABCDE

[zero-body]
host = akab-zero.luna.akamaiapis.net
client_token = ct
client_secret = cs
access_token = at
max_body = 0

[missing-host]
client_token = ct
client_secret = cs
access_token = at

[missing-client-secret]
host = akab-missing.luna.akamaiapis.net
client_token = ct
access_token = at
"""


@pytest.fixture
def golden_credential() -> Credential:
    """Credential used by the pinned signature vectors."""
    return Credential(
        client_token="ct1",
        client_secret="c2VjcmV0",
        access_token="at1",
        host="host",
        max_body_size=131072,
        headers_to_sign=(),
    )


@pytest.fixture
def credential() -> Credential:
    """Credential that signs two custom headers and a small body limit."""
    return Credential(
        client_token="akab-client-token-xxx",
        client_secret="xxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx=",
        access_token="akab-access-token-xxx",
        host="akab-baseurl-xxx.luna.akamaiapis.net",
        max_body_size=16,
        headers_to_sign=("X-Test1", "X-Test2"),
    )


@pytest.fixture
def post_request() -> SignableRequest:
    """POST with a JSON body and one signed header."""
    return SignableRequest(
        method="POST",
        scheme="https",
        host="akab-baseurl-xxx.luna.akamaiapis.net",
        path="/config-dns/v2/zones?contractId=1-ABC",
        headers={"X-Test1": "value1", "Content-Type": "application/json"},
        body=b'{"zone": "example.com"}',
    )


@pytest.fixture
def edgerc_file(tmp_path: Path) -> Path:
    """Sample .edgerc written to a temp dir."""
    path = tmp_path / "edgerc"
    path.write_text(SAMPLE_EDGERC, encoding="utf-8")
    return path
