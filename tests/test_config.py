"""Tests for credential loading."""

import pytest

from edgegrid_auth.common.errors import ConfigFileError, MissingOption, SectionNotFound
from edgegrid_auth.config import env_prefix, load_credential, load_edgerc, load_env

ENV_NAMES = [
    f"{prefix}{name}"
    for prefix in ("AKAMAI_", "AKAMAI_TEST_")
    for name in (
        "HOST",
        "CLIENT_TOKEN",
        "CLIENT_SECRET",
        "ACCESS_TOKEN",
        "MAX_BODY",
        "ACCOUNT_KEY",
    )
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure no real AKAMAI_* variables leak into tests."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def _set_env(monkeypatch, prefix: str, **values: str) -> None:
    for name, value in values.items():
        monkeypatch.setenv(f"{prefix}{name.upper()}", value)


class TestLoadEdgerc:
    """Tests for .edgerc file loading."""

    def test_default_section(self, edgerc_file):
        credential = load_edgerc(edgerc_file)

        assert credential.host == "akab-default-xxxxxxxx.luna.akamaiapis.net"
        assert credential.client_token == "akab-client-token-default"
        assert credential.client_secret == "default-secret="
        assert credential.access_token == "akab-access-token-default"
        assert credential.max_body_size == 131072
        assert credential.headers_to_sign == ()
        assert credential.account_key is None

    def test_named_section_with_optional_keys(self, edgerc_file):
        credential = load_edgerc(edgerc_file, "test")

        assert credential.client_secret == "test%secret="
        assert credential.max_body_size == 2048
        assert credential.headers_to_sign == ("X-Test1", "X-Test2")
        assert credential.account_key == "1-ABCDE"

    def test_zero_max_body_uses_default(self, edgerc_file):
        assert load_edgerc(edgerc_file, "zero-body").max_body_size == 131072

    def test_file_not_found(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_edgerc(tmp_path / "missing", "default")

    def test_unparsable_file(self, tmp_path):
        path = tmp_path / "broken"
        path.write_text("host = no section header\n", encoding="utf-8")
        with pytest.raises(ConfigFileError):
            load_edgerc(path)

    def test_section_not_found(self, edgerc_file):
        with pytest.raises(SectionNotFound):
            load_edgerc(edgerc_file, "abc")

    @pytest.mark.parametrize(
        ("section", "option"),
        [("missing-host", "host"), ("missing-client-secret", "client_secret")],
    )
    def test_missing_required_option(self, edgerc_file, section, option):
        with pytest.raises(MissingOption) as exc_info:
            load_edgerc(edgerc_file, section)
        assert exc_info.value.option == option

    def test_secret_hidden_from_repr(self, edgerc_file):
        credential = load_edgerc(edgerc_file)
        assert "default-secret=" not in repr(credential)


class TestLoadEnv:
    """Tests for AKAMAI_* environment loading."""

    def test_env_prefix(self):
        assert env_prefix("default") == "AKAMAI_"
        assert env_prefix("ccu") == "AKAMAI_CCU_"

    def test_default_section(self, monkeypatch):
        _set_env(
            monkeypatch,
            "AKAMAI_",
            host="test-host",
            client_token="test-client-token",
            client_secret="test-client-secret",
            access_token="test-access-token",
        )

        credential = load_env()

        assert credential.host == "test-host"
        assert credential.client_token == "test-client-token"
        assert credential.client_secret == "test-client-secret"
        assert credential.access_token == "test-access-token"
        assert credential.max_body_size == 131072

    def test_max_body_and_account_key(self, monkeypatch):
        _set_env(
            monkeypatch,
            "AKAMAI_",
            host="h",
            client_token="ct",
            client_secret="cs",
            access_token="at",
            max_body="123",
            account_key="account-key-123",
        )

        credential = load_env()

        assert credential.max_body_size == 123
        assert credential.account_key == "account-key-123"

    def test_invalid_max_body_uses_default(self, monkeypatch):
        _set_env(
            monkeypatch,
            "AKAMAI_",
            host="h",
            client_token="ct",
            client_secret="cs",
            access_token="at",
            max_body="abc",
        )
        assert load_env().max_body_size == 131072

    def test_custom_section(self, monkeypatch):
        _set_env(
            monkeypatch,
            "AKAMAI_TEST_",
            host="test-host",
            client_token="ct",
            client_secret="cs",
            access_token="at",
        )

        assert load_env("test").host == "test-host"

    def test_missing_variable(self, monkeypatch):
        _set_env(monkeypatch, "AKAMAI_", client_token="ct", client_secret="cs", access_token="at")

        with pytest.raises(MissingOption) as exc_info:
            load_env()

        assert exc_info.value.option == "AKAMAI_HOST"


class TestLoadCredential:
    """Tests for env-then-file resolution."""

    def test_env_preferred(self, monkeypatch, edgerc_file):
        _set_env(
            monkeypatch,
            "AKAMAI_",
            host="env-host",
            client_token="ct",
            client_secret="cs",
            access_token="at",
        )
        assert load_credential(edgerc_file, use_env=True).host == "env-host"

    def test_env_ignored_when_not_requested(self, monkeypatch, edgerc_file):
        _set_env(
            monkeypatch,
            "AKAMAI_",
            host="env-host",
            client_token="ct",
            client_secret="cs",
            access_token="at",
        )
        assert load_credential(edgerc_file).host == "akab-default-xxxxxxxx.luna.akamaiapis.net"

    def test_falls_back_to_file(self, edgerc_file):
        credential = load_credential(edgerc_file, "test", use_env=True)
        assert credential.host == "akab-test-xxxxxxxx.luna.akamaiapis.net"

    def test_both_missing(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_credential(tmp_path / "missing", use_env=True)
