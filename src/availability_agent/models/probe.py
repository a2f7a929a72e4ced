# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe definition and probe result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from ..errors import ErrorKind


def is_success_status(status_code: int) -> bool:
    """Half-open 2xx range: 300 is already a failure."""
    return 200 <= status_code < 300


@dataclass(frozen=True)
class ProbeDefinition:
    """One configured HTTP availability check."""

    url: str
    test_name: str
    http_method: str = "GET"
    timeout_seconds: int = 30
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError("url must be a non-empty string")
        if not self.test_name or not self.test_name.strip():
            raise ValueError("test_name must be a non-empty string")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "test_name": self.test_name,
            "http_method": self.http_method,
            "timeout_seconds": self.timeout_seconds,
            "headers": dict(self.headers),
        }


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of one executed probe.

    Build instances through the classmethods below; `__post_init__` rejects any
    combination that breaks the success/error_kind/status_code pairing.
    """

    url: str
    test_name: str
    timestamp: datetime
    success: bool
    duration: timedelta
    error_kind: ErrorKind = ErrorKind.NONE
    status_code: int | None = None
    error_message: str | None = None
    http_method: str = "GET"

    def __post_init__(self) -> None:
        if self.success != (self.error_kind == ErrorKind.NONE):
            raise ValueError("success must be True exactly when error_kind is NONE")
        if self.success == (self.error_message is not None):
            raise ValueError("error_message must be set exactly when the probe failed")
        has_status = self.error_kind in (ErrorKind.NONE, ErrorKind.HTTP_FAILURE)
        if has_status != (self.status_code is not None):
            raise ValueError(f"status_code presence does not match error_kind {self.error_kind.value}")
        if self.duration < timedelta(0):
            raise ValueError("duration must be non-negative")

    @classmethod
    def from_response(
        cls,
        definition: ProbeDefinition,
        *,
        timestamp: datetime,
        duration: timedelta,
        status_code: int,
        reason_phrase: str = "",
    ) -> ProbeResult:
        if is_success_status(status_code):
            return cls(
                url=definition.url,
                test_name=definition.test_name,
                timestamp=timestamp,
                success=True,
                duration=duration,
                status_code=status_code,
                http_method=definition.http_method,
            )
        return cls(
            url=definition.url,
            test_name=definition.test_name,
            timestamp=timestamp,
            success=False,
            duration=duration,
            error_kind=ErrorKind.HTTP_FAILURE,
            status_code=status_code,
            error_message=f"HTTP {status_code}: {reason_phrase}",
            http_method=definition.http_method,
        )

    @classmethod
    def failed(
        cls,
        definition: ProbeDefinition,
        *,
        timestamp: datetime,
        duration: timedelta,
        error_kind: ErrorKind,
        error_message: str,
    ) -> ProbeResult:
        """Result for an attempt that never produced a response."""
        return cls(
            url=definition.url,
            test_name=definition.test_name,
            timestamp=timestamp,
            success=False,
            duration=duration,
            error_kind=error_kind,
            error_message=error_message,
            http_method=definition.http_method,
        )

    @classmethod
    def timed_out(cls, definition: ProbeDefinition, *, timestamp: datetime, duration: timedelta) -> ProbeResult:
        return cls.failed(
            definition,
            timestamp=timestamp,
            duration=duration,
            error_kind=ErrorKind.TIMEOUT,
            error_message=f"Request timeout after {definition.timeout_seconds} seconds",
        )

    @classmethod
    def transport_failure(
        cls, definition: ProbeDefinition, *, timestamp: datetime, duration: timedelta, diagnostic: str
    ) -> ProbeResult:
        return cls.failed(
            definition,
            timestamp=timestamp,
            duration=duration,
            error_kind=ErrorKind.TRANSPORT_ERROR,
            error_message=f"HTTP request error: {diagnostic}",
        )

    @classmethod
    def unexpected(
        cls, definition: ProbeDefinition, *, timestamp: datetime, duration: timedelta, description: str
    ) -> ProbeResult:
        return cls.failed(
            definition,
            timestamp=timestamp,
            duration=duration,
            error_kind=ErrorKind.UNEXPECTED_ERROR,
            error_message=f"Unexpected error: {description}",
        )

    @property
    def duration_ms(self) -> float:
        return self.duration.total_seconds() * 1000.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "test_name": self.test_name,
            "http_method": self.http_method,
            "timestamp": self.timestamp.isoformat(),
            "success": self.success,
            "duration_ms": round(self.duration_ms, 3),
            "status_code": self.status_code,
            "error_kind": self.error_kind.value,
            "error_message": self.error_message,
        }
