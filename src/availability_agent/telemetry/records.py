# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Availability record shaped for monitoring backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from ..models import ProbeResult


@dataclass(frozen=True)
class AvailabilityRecord:
    name: str
    run_location: str
    success: bool
    duration: timedelta
    timestamp: datetime
    message: str | None = None
    properties: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_result(cls, result: ProbeResult, *, run_location: str) -> AvailabilityRecord:
        properties = {
            "url": result.url,
            "http_method": result.http_method,
            "error_kind": result.error_kind.value,
        }
        if result.status_code is not None:
            properties["status_code"] = str(result.status_code)
        return cls(
            name=result.test_name,
            run_location=run_location,
            success=result.success,
            duration=result.duration,
            timestamp=result.timestamp,
            message=result.error_message,
            properties=properties,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "availability",
            "name": self.name,
            "run_location": self.run_location,
            "success": self.success,
            "duration_ms": round(self.duration.total_seconds() * 1000.0, 3),
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
            "properties": dict(self.properties),
        }
