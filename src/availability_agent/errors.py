# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class ConfigError(Exception):
    """Base class for configuration failures that abort a batch before any probe runs."""


class ConfigParseError(ConfigError):
    """The raw probe specification is structurally malformed."""

    def __init__(self, message: str, *, diagnostic: str | None = None):
        super().__init__(message)
        self.diagnostic = diagnostic


class ConfigEmptyError(ConfigError):
    """Resolution produced zero probe definitions."""


class ErrorKind(str, Enum):
    NONE = "None"
    HTTP_FAILURE = "HttpFailure"
    TIMEOUT = "Timeout"
    TRANSPORT_ERROR = "TransportError"
    UNEXPECTED_ERROR = "UnexpectedError"


def categorize_exception(exc: BaseException) -> ErrorKind:
    """
    Map Python/httpx exceptions raised while sending a request to an ErrorKind.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorKind.TIMEOUT

    if isinstance(exc, httpx.TransportError):
        return ErrorKind.TRANSPORT_ERROR

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorKind.TRANSPORT_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorKind.TRANSPORT_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorKind.TRANSPORT_ERROR

    return ErrorKind.UNEXPECTED_ERROR


__all__ = [
    "ConfigEmptyError",
    "ConfigError",
    "ConfigParseError",
    "ErrorKind",
    "categorize_exception",
]
