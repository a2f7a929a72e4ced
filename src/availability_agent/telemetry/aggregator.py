# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch summary reduction and emission."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models import BatchSummary, ProbeResult
from .sink import TelemetrySink

logger = logging.getLogger(__name__)


def summarize(results: Iterable[ProbeResult]) -> BatchSummary:
    return BatchSummary.from_results(results)


def emit_batch_summary(sink: TelemetrySink, summary: BatchSummary, *, test_location: str) -> None:
    """Log the batch summary and forward it to the sink, then flush the sink."""
    logger.info(
        "Probe execution completed. Success: %d, Failed: %d, Total Duration: %.0fms",
        summary.success_count,
        summary.failure_count,
        summary.total_duration_millis,
    )
    try:
        sink.track_batch_summary(summary, test_location=test_location)
        sink.flush()
    except Exception:  # noqa: BLE001
        logger.exception("Telemetry sink failed while recording the batch summary")


__all__ = ["emit_batch_summary", "summarize"]
