# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from availability_agent.config import AgentSettings
from availability_agent.models import BatchSummary, ProbeDefinition, ProbeResult
from availability_agent.telemetry import (
    AvailabilityRecord,
    JsonLinesTelemetrySink,
    LoggingTelemetrySink,
    RecordingTelemetrySink,
    create_telemetry_sink,
    emit_batch_summary,
    summarize,
)
from availability_agent.version import __version__

NOW = datetime(2025, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
DEFINITION = ProbeDefinition(url="https://example.com/health", test_name="PE-example-com-health", http_method="GET")


def _result(status=200):
    return ProbeResult.from_response(
        DEFINITION, timestamp=NOW, duration=timedelta(milliseconds=42), status_code=status, reason_phrase="Bad Gateway"
    )


def test_record_from_failed_result():
    record = AvailabilityRecord.from_result(_result(502), run_location="VNET")
    assert record.name == "PE-example-com-health"
    assert record.success is False
    assert record.message == "HTTP 502: Bad Gateway"
    assert record.duration == timedelta(milliseconds=42)
    assert record.properties == {
        "url": "https://example.com/health",
        "http_method": "GET",
        "error_kind": "HttpFailure",
        "status_code": "502",
    }


def test_jsonl_sink_writes_one_line_per_record_with_context():
    stream = io.StringIO()
    sink = JsonLinesTelemetrySink(stream, role_name="edge")
    sink.track_availability(AvailabilityRecord.from_result(_result(), run_location="VNET"))
    sink.track_batch_summary(BatchSummary(success_count=1, failure_count=0, total_duration=timedelta(milliseconds=42)), test_location="VNET")
    sink.flush()

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert len(lines) == 2
    record, summary = lines
    assert record["type"] == "availability"
    assert record["success"] is True
    assert record["timestamp"] == NOW.isoformat()
    assert record["duration_ms"] == 42.0
    assert record["role_name"] == "edge"
    assert record["version"] == __version__
    assert summary["type"] == "batch_summary"
    assert summary["success_count"] == 1
    assert summary["run_location"] == "VNET"


def test_logging_sink_logs_failures_as_warnings(caplog):
    sink = LoggingTelemetrySink()
    with caplog.at_level(logging.INFO, logger="availability_agent.telemetry"):
        sink.track_availability(AvailabilityRecord.from_result(_result(), run_location="VNET"))
        sink.track_availability(AvailabilityRecord.from_result(_result(500), run_location="VNET"))
        sink.track_batch_summary(BatchSummary(success_count=1, failure_count=1), test_location="VNET")
        sink.flush()

    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.INFO, logging.WARNING, logging.INFO]
    assert "PE-example-com-health" in caplog.records[0].getMessage()
    assert "failed=1" in caplog.records[2].getMessage()


def test_emit_batch_summary_logs_forwards_and_flushes(caplog):
    sink = RecordingTelemetrySink()
    summary = summarize([_result(), _result(404)])
    with caplog.at_level(logging.INFO, logger="availability_agent.telemetry"):
        emit_batch_summary(sink, summary, test_location="VNET")

    assert sink.summaries == [(summary, "VNET")]
    assert sink.flushes == 1
    assert "Success: 1, Failed: 1, Total Duration: 84ms" in caplog.text


def test_emit_batch_summary_swallows_sink_errors(caplog):
    class BrokenSink(RecordingTelemetrySink):
        def flush(self):
            raise OSError("pipe closed")

    with caplog.at_level(logging.ERROR, logger="availability_agent.telemetry"):
        emit_batch_summary(BrokenSink(), BatchSummary(), test_location="VNET")
    assert "batch summary" in caplog.text


def test_create_telemetry_sink():
    assert isinstance(create_telemetry_sink(AgentSettings()), LoggingTelemetrySink)
    assert isinstance(create_telemetry_sink(AgentSettings(telemetry_sink="jsonl")), JsonLinesTelemetrySink)
    with pytest.raises(ValueError):
        create_telemetry_sink(AgentSettings(telemetry_sink="kafka"))


def test_create_telemetry_sink_writes_jsonl_to_the_given_stream():
    stream = io.StringIO()
    sink = create_telemetry_sink(AgentSettings(telemetry_sink="jsonl", role_name="edge"), stream=stream)
    sink.track_batch_summary(BatchSummary(success_count=2), test_location="VNET")
    assert json.loads(stream.getvalue())["role_name"] == "edge"
