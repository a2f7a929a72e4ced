# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Telemetry sink abstraction and the bundled local sinks."""

from __future__ import annotations

import json
import logging
import sys
import threading
from typing import Protocol, TextIO

from ..config import AgentSettings
from ..models import BatchSummary
from ..version import __version__
from .records import AvailabilityRecord

logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Receives one record per executed probe and one summary per batch."""

    def track_availability(self, record: AvailabilityRecord) -> None: ...

    def track_batch_summary(self, summary: BatchSummary, *, test_location: str) -> None: ...

    def flush(self) -> None: ...


class LoggingTelemetrySink(TelemetrySink):
    """Writes availability records through the standard logging tree."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def track_availability(self, record: AvailabilityRecord) -> None:
        level = logging.INFO if record.success else logging.WARNING
        self._log.log(
            level,
            "availability name=%s location=%s success=%s duration_ms=%.1f properties=%s",
            record.name,
            record.run_location,
            record.success,
            record.duration.total_seconds() * 1000.0,
            record.properties,
        )

    def track_batch_summary(self, summary: BatchSummary, *, test_location: str) -> None:
        self._log.info(
            "batch location=%s success=%d failed=%d total_duration_ms=%.1f",
            test_location,
            summary.success_count,
            summary.failure_count,
            summary.total_duration_millis,
        )

    def flush(self) -> None:
        for handler in self._log.handlers:
            handler.flush()


class JsonLinesTelemetrySink(TelemetrySink):
    """One JSON object per line on a text stream, tagged with role name and version."""

    def __init__(self, stream: TextIO | None = None, *, role_name: str = "AvailabilityAgent"):
        self._stream = stream if stream is not None else sys.stdout
        self._role_name = role_name
        self._lock = threading.Lock()

    def _write(self, payload: dict) -> None:
        payload["role_name"] = self._role_name
        payload["version"] = __version__
        line = json.dumps(payload, sort_keys=True)
        with self._lock:
            self._stream.write(line + "\n")

    def track_availability(self, record: AvailabilityRecord) -> None:
        self._write(record.to_dict())

    def track_batch_summary(self, summary: BatchSummary, *, test_location: str) -> None:
        payload = {"type": "batch_summary", "run_location": test_location}
        payload.update(summary.to_dict())
        self._write(payload)

    def flush(self) -> None:
        self._stream.flush()


class RecordingTelemetrySink(TelemetrySink):
    """Keeps everything in memory; used by tests and embedding hosts."""

    def __init__(self):
        self.records: list[AvailabilityRecord] = []
        self.summaries: list[tuple[BatchSummary, str]] = []
        self.flushes = 0

    def track_availability(self, record: AvailabilityRecord) -> None:
        self.records.append(record)

    def track_batch_summary(self, summary: BatchSummary, *, test_location: str) -> None:
        self.summaries.append((summary, test_location))

    def flush(self) -> None:
        self.flushes += 1


def create_telemetry_sink(settings: AgentSettings, *, stream: TextIO | None = None) -> TelemetrySink:
    """Factory keyed on ``settings.telemetry_sink``; ``stream`` redirects the jsonl sink (default stdout)."""
    kind = (settings.telemetry_sink or "log").strip().lower()
    if kind == "log":
        return LoggingTelemetrySink()
    if kind == "jsonl":
        return JsonLinesTelemetrySink(stream, role_name=settings.role_name)
    raise ValueError(f"Unknown telemetry sink: {settings.telemetry_sink!r} (expected 'log' or 'jsonl')")
