# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    METHOD_REQUIRED = "METHOD_REQUIRED"
    NO_URL_SPECIFIED = "NO_URL_SPECIFIED"
    SUFFIX_WITHOUT_BASE = "SUFFIX_WITHOUT_BASE"
    HEADER_PARSE = "HEADER_PARSE"
    ACCEPTED_STATUS_CODES_PARSE = "ACCEPTED_STATUS_CODES_PARSE"
    NO_AUTH_CONFIGURED = "NO_AUTH_CONFIGURED"
    MISSING_OAUTH2_CONFIG = "MISSING_OAUTH2_CONFIG"
    OAUTH2_TOKEN_REQUEST_FAILED = "OAUTH2_TOKEN_REQUEST_FAILED"
    OAUTH2_NO_ACCESS_TOKEN = "OAUTH2_NO_ACCESS_TOKEN"
    REMOTE_REQUEST_FAILED = "REMOTE_REQUEST_FAILED"
    TRANSPORT = "TRANSPORT"


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class WebhookError(Exception):
    """Base error raised by the action; `kind` drives classification, `message` is for display."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class MethodRequiredError(WebhookError):
    kind = ErrorKind.METHOD_REQUIRED

    def __init__(self) -> None:
        super().__init__("method is required")


class NoURLSpecifiedError(WebhookError):
    kind = ErrorKind.NO_URL_SPECIFIED

    def __init__(self) -> None:
        super().__init__("No URL specified. Provide either address parameter or address environment variable")


class SuffixWithoutBaseError(WebhookError):
    kind = ErrorKind.SUFFIX_WITHOUT_BASE

    def __init__(self) -> None:
        super().__init__(
            "addressSuffix provided but no base address available. "
            "Provide either address parameter or address environment variable"
        )


class HeaderParseError(WebhookError):
    kind = ErrorKind.HEADER_PARSE

    def __init__(self, detail: str):
        super().__init__(f"Failed to parse requestHeaders: {detail}")


class AcceptedStatusCodesParseError(WebhookError):
    kind = ErrorKind.ACCEPTED_STATUS_CODES_PARSE

    def __init__(self, detail: str):
        super().__init__(f"Failed to parse acceptedStatusCodes: {detail}")


class NoAuthConfiguredError(WebhookError):
    kind = ErrorKind.NO_AUTH_CONFIGURED

    def __init__(self) -> None:
        super().__init__("No authentication configured")


class MissingOAuth2ConfigError(WebhookError):
    kind = ErrorKind.MISSING_OAUTH2_CONFIG

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"{' and '.join(self.missing)} is required for the OAuth2 client credentials flow")


class OAuth2TokenRequestError(WebhookError):
    kind = ErrorKind.OAUTH2_TOKEN_REQUEST_FAILED

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        super().__init__(f"OAuth2 token request failed with status code: {status_code}. Response: {detail}")


class OAuth2NoAccessTokenError(WebhookError):
    kind = ErrorKind.OAUTH2_NO_ACCESS_TOKEN

    def __init__(self) -> None:
        super().__init__("OAuth2 token response did not contain an access_token")


class RemoteRequestFailedError(WebhookError):
    kind = ErrorKind.REMOTE_REQUEST_FAILED

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request failed with status code: {status_code}. Response body: {body}.")


class TransportError(WebhookError):
    """Raised when no HTTP response was received at all."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, detail: str, *, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR, error_type: str | None = None):
        self.category = category
        self.error_type = error_type
        super().__init__(f"fetch failed: {detail}")


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "AcceptedStatusCodesParseError",
    "ErrorCategory",
    "ErrorKind",
    "HeaderParseError",
    "MethodRequiredError",
    "MissingOAuth2ConfigError",
    "NoAuthConfiguredError",
    "NoURLSpecifiedError",
    "OAuth2NoAccessTokenError",
    "OAuth2TokenRequestError",
    "RemoteRequestFailedError",
    "SuffixWithoutBaseError",
    "TransportError",
    "WebhookError",
    "categorize_exception",
]
