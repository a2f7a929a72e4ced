# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from datetime import datetime, timedelta, timezone

import pytest

from availability_agent.errors import ErrorKind
from availability_agent.models import BatchReport, BatchSummary, ProbeDefinition, ProbeResult, is_success_status

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)
DEFINITION = ProbeDefinition(url="https://example.com", test_name="T", timeout_seconds=3)


def _ok(ms):
    return ProbeResult.from_response(DEFINITION, timestamp=NOW, duration=timedelta(milliseconds=ms), status_code=200)


def _fail(ms):
    return ProbeResult.timed_out(DEFINITION, timestamp=NOW, duration=timedelta(milliseconds=ms))


def test_success_range_is_half_open():
    assert is_success_status(200)
    assert is_success_status(299)
    assert not is_success_status(300)
    assert not is_success_status(199)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"success": True, "error_kind": ErrorKind.TIMEOUT},
        {"success": False, "error_kind": ErrorKind.NONE, "status_code": 200, "error_message": "x"},
        {"success": True, "status_code": 200, "error_message": "x"},
        {"success": False, "error_kind": ErrorKind.TIMEOUT, "status_code": 504, "error_message": "x"},
        {"success": False, "error_kind": ErrorKind.HTTP_FAILURE, "error_message": "x"},
        {"success": True, "status_code": None},
    ],
)
def test_probe_result_rejects_inconsistent_combinations(kwargs):
    with pytest.raises(ValueError):
        ProbeResult(url="u", test_name="t", timestamp=NOW, duration=timedelta(0), **kwargs)


def test_probe_result_rejects_negative_duration():
    with pytest.raises(ValueError):
        _ok(-1)


def test_failure_constructors_omit_status_code():
    transport = ProbeResult.transport_failure(DEFINITION, timestamp=NOW, duration=timedelta(0), diagnostic="dns")
    unexpected = ProbeResult.unexpected(DEFINITION, timestamp=NOW, duration=timedelta(0), description="oops")
    timeout = _fail(3000)

    assert (transport.error_kind, transport.status_code, transport.error_message) == (
        ErrorKind.TRANSPORT_ERROR,
        None,
        "HTTP request error: dns",
    )
    assert (unexpected.error_kind, unexpected.error_message) == (ErrorKind.UNEXPECTED_ERROR, "Unexpected error: oops")
    assert timeout.error_message == "Request timeout after 3 seconds"


def test_batch_summary_counts_and_sums():
    results = [_ok(100), _fail(3000), _ok(250), _fail(50)]
    summary = BatchSummary.from_results(results)

    assert summary.success_count == 2
    assert summary.failure_count == 2
    assert summary.success_count + summary.failure_count == len(results)
    assert summary.total_duration == timedelta(milliseconds=3400)
    assert summary.total_duration_millis == pytest.approx(3400.0)


def test_batch_summary_of_nothing_is_zero():
    summary = BatchSummary.from_results([])
    assert (summary.success_count, summary.failure_count, summary.total_duration) == (0, 0, timedelta(0))


def test_batch_report_to_dict():
    results = [_ok(10), _fail(20)]
    report = BatchReport(
        invoked_at=NOW,
        test_location="VNET",
        results=results,
        summary=BatchSummary.from_results(results),
        next_run=NOW + timedelta(minutes=5),
    )
    data = report.to_dict()

    assert report.all_succeeded is False
    assert data["skipped"] is False
    assert data["next_run"] == "2025-06-01T00:05:00+00:00"
    assert data["summary"] == {"success_count": 1, "failure_count": 1, "total_duration_ms": 30.0}
    assert [r["error_kind"] for r in data["results"]] == ["None", "Timeout"]


def test_probe_definition_to_dict_copies_headers():
    definition = ProbeDefinition(url="https://example.com", test_name="T", headers={"A": "1"})
    data = definition.to_dict()
    data["headers"]["B"] = "2"
    assert definition.headers == {"A": "1"}
    assert data["http_method"] == "GET"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"url": "", "test_name": "T"},
        {"url": "   ", "test_name": "T"},
        {"url": "https://example.com", "test_name": ""},
        {"url": "https://example.com", "test_name": "T", "timeout_seconds": 0},
        {"url": "https://example.com", "test_name": "T", "timeout_seconds": -3},
    ],
)
def test_probe_definition_rejects_unusable_values(kwargs):
    with pytest.raises(ValueError):
        ProbeDefinition(**kwargs)
