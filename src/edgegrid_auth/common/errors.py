"""Shared error types and codes."""

from __future__ import annotations


class ErrorCode:
    INVALID_CREDENTIAL = "invalid_credential"
    INVALID_REQUEST = "invalid_request"
    ENCODING_ERROR = "encoding_error"
    INVALID_AUTHORIZATION = "invalid_authorization"
    CONFIG_FILE = "config_file"
    SECTION_NOT_FOUND = "section_not_found"
    MISSING_OPTION = "missing_option"
    REQUEST_FAILED = "request_failed"


class EdgeGridError(Exception):
    """Base error for edgegrid-auth."""

    code = "edgegrid_error"


class SigningError(EdgeGridError):
    """A request could not be signed or checked. Never retryable."""

    code = "signing_error"


class InvalidCredential(SigningError):
    """A required credential field is empty or out of range."""

    code = ErrorCode.INVALID_CREDENTIAL


class InvalidRequest(SigningError):
    """The request is missing its method or path."""

    code = ErrorCode.INVALID_REQUEST


class EncodingError(SigningError):
    """The request body could not be read as bytes."""

    code = ErrorCode.ENCODING_ERROR


class InvalidAuthorization(SigningError):
    """An Authorization header could not be parsed."""

    code = ErrorCode.INVALID_AUTHORIZATION


class ConfigError(EdgeGridError):
    """Credentials could not be loaded."""

    code = "config_error"


class ConfigFileError(ConfigError):
    code = ErrorCode.CONFIG_FILE


class SectionNotFound(ConfigError):
    code = ErrorCode.SECTION_NOT_FOUND


class MissingOption(ConfigError):
    """A required option is absent from the file or environment."""

    code = ErrorCode.MISSING_OPTION

    def __init__(self, option: str, source: str) -> None:
        super().__init__(f"required option {option!r} is missing from {source}")
        self.option = option
        self.source = source


class EdgeGridClientError(EdgeGridError):
    """Error talking to an EdgeGrid API."""

    code = ErrorCode.REQUEST_FAILED

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
