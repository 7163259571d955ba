"""Credential loading from .edgerc files and AKAMAI_* environment variables."""

from __future__ import annotations

import configparser
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from edgegrid_auth.common.errors import ConfigFileError, MissingOption, SectionNotFound
from edgegrid_auth.common.logging import get_logger
from edgegrid_auth.signing.models import DEFAULT_MAX_BODY_SIZE, Credential

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "~/.edgerc"
DEFAULT_SECTION = "default"

REQUIRED_OPTIONS = ("host", "client_token", "client_secret", "access_token")


def _parse_max_body(value: str | None) -> int:
    """Positive integer body limit, or the default when unset, zero or invalid."""
    if not value:
        return DEFAULT_MAX_BODY_SIZE
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid max_body value", value=value)
        return DEFAULT_MAX_BODY_SIZE
    return parsed if parsed > 0 else DEFAULT_MAX_BODY_SIZE


def _parse_headers(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(name.strip() for name in value.split(",") if name.strip())


def load_edgerc(path: str | Path = DEFAULT_CONFIG_FILE, section: str = DEFAULT_SECTION) -> Credential:
    """
    Load one credential section from an INI-style .edgerc file.

    Args:
        path: File path; ``~`` is expanded
        section: Section name

    Returns:
        Credential for the section

    Raises:
        ConfigFileError: If the file is missing or cannot be parsed
        SectionNotFound: If the section does not exist
        MissingOption: If a required key is absent
    """
    config_path = Path(path).expanduser()
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with config_path.open(encoding="utf-8") as fh:
            parser.read_file(fh)
    except (OSError, configparser.Error) as e:
        raise ConfigFileError(f"could not load config file {config_path}: {e}") from e

    if not parser.has_section(section):
        raise SectionNotFound(f"section {section!r} does not exist in {config_path}")

    values = parser[section]
    for option in REQUIRED_OPTIONS:
        if option not in values:
            raise MissingOption(option, "edgerc")

    logger.debug("Loaded credential from file", path=str(config_path), section=section)
    return Credential(
        host=values["host"],
        client_token=values["client_token"],
        client_secret=values["client_secret"],
        access_token=values["access_token"],
        max_body_size=_parse_max_body(values.get("max_body")),
        headers_to_sign=_parse_headers(values.get("headers_to_sign")),
        account_key=values.get("account_key") or None,
    )


class EnvCredentialSettings(BaseSettings):
    """Raw AKAMAI_* variables for one section."""

    model_config = SettingsConfigDict(
        env_prefix="AKAMAI_",
        extra="ignore",
    )

    host: str | None = None
    client_token: str | None = None
    client_secret: str | None = None
    access_token: str | None = None
    max_body: str | None = None
    account_key: str | None = None


def env_prefix(section: str = DEFAULT_SECTION) -> str:
    """``AKAMAI_`` for the default section, ``AKAMAI_<SECTION>_`` otherwise."""
    if section.lower() == DEFAULT_SECTION:
        return "AKAMAI_"
    return f"AKAMAI_{section.upper()}_"


def load_env(section: str = DEFAULT_SECTION) -> Credential:
    """
    Load a credential from environment variables.

    Uses AKAMAI_HOST, AKAMAI_CLIENT_TOKEN, AKAMAI_CLIENT_SECRET,
    AKAMAI_ACCESS_TOKEN and optionally AKAMAI_MAX_BODY and AKAMAI_ACCOUNT_KEY.
    A non-default section reads AKAMAI_<SECTION>_HOST and so on.

    Raises:
        MissingOption: If a required variable is unset
    """
    prefix = env_prefix(section)
    env = EnvCredentialSettings(_env_prefix=prefix)

    for option in REQUIRED_OPTIONS:
        if getattr(env, option) is None:
            raise MissingOption(f"{prefix}{option.upper()}", "env")

    assert env.host is not None
    assert env.client_token is not None
    assert env.client_secret is not None
    assert env.access_token is not None

    logger.debug("Loaded credential from environment", prefix=prefix)
    return Credential(
        host=env.host,
        client_token=env.client_token,
        client_secret=env.client_secret,
        access_token=env.access_token,
        max_body_size=_parse_max_body(env.max_body),
        account_key=env.account_key or None,
    )


def load_credential(
    path: str | Path = DEFAULT_CONFIG_FILE,
    section: str = DEFAULT_SECTION,
    use_env: bool = False,
) -> Credential:
    """
    Load a credential, trying the environment first when ``use_env`` is set.

    Falls back to the .edgerc file if the environment is incomplete.
    """
    if use_env:
        try:
            return load_env(section)
        except MissingOption as e:
            logger.debug("Environment credential incomplete, using file", reason=str(e))

    return load_edgerc(path, section)
