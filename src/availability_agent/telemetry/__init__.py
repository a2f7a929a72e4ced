# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Telemetry records, sinks and batch aggregation."""

from .aggregator import emit_batch_summary, summarize
from .records import AvailabilityRecord
from .sink import (
    JsonLinesTelemetrySink,
    LoggingTelemetrySink,
    RecordingTelemetrySink,
    TelemetrySink,
    create_telemetry_sink,
)

__all__ = [
    "AvailabilityRecord",
    "JsonLinesTelemetrySink",
    "LoggingTelemetrySink",
    "RecordingTelemetrySink",
    "TelemetrySink",
    "create_telemetry_sink",
    "emit_batch_summary",
    "summarize",
]
