# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch-level configuration, summary and report models."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from .probe import ProbeDefinition, ProbeResult


@dataclass(frozen=True)
class ProbeBatchConfig:
    """Resolved, immutable set of probes plus the scalar defaults they were built with."""

    probes: tuple[ProbeDefinition, ...]
    default_timeout_seconds: int
    test_name_prefix: str
    test_location: str = ""

    def __len__(self) -> int:
        return len(self.probes)


@dataclass(frozen=True)
class BatchSummary:
    success_count: int = 0
    failure_count: int = 0
    total_duration: timedelta = timedelta(0)

    @classmethod
    def from_results(cls, results: Iterable[ProbeResult]) -> BatchSummary:
        success_count = 0
        failure_count = 0
        total = timedelta(0)
        for result in results:
            if result.success:
                success_count += 1
            else:
                failure_count += 1
            total += result.duration
        return cls(success_count=success_count, failure_count=failure_count, total_duration=total)

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count

    @property
    def total_duration_millis(self) -> float:
        return self.total_duration.total_seconds() * 1000.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "total_duration_ms": round(self.total_duration_millis, 3),
        }


@dataclass
class BatchReport:
    """Everything one scheduled invocation produced."""

    invoked_at: datetime
    test_location: str
    results: list[ProbeResult] = field(default_factory=list)
    summary: BatchSummary = field(default_factory=BatchSummary)
    next_run: datetime | None = None
    skipped: bool = False

    @property
    def all_succeeded(self) -> bool:
        return self.summary.failure_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoked_at": self.invoked_at.isoformat(),
            "test_location": self.test_location,
            "skipped": self.skipped,
            "next_run": self.next_run.isoformat() if self.next_run else None,
            "summary": self.summary.to_dict(),
            "results": [result.to_dict() for result in self.results],
        }
