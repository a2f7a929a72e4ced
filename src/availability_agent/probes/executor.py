# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Single-probe execution.

`ProbeExecutor.execute` is total: every outcome (response, deadline expiry, transport
failure, anything else) comes back as a ProbeResult. Classification looks at what the
attempt produced: a status line, the probe's own deadline firing, or the
ErrorKind the transport attached to a failed HttpResponse.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from ..errors import ErrorKind
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..models import ProbeDefinition, ProbeResult
from ..telemetry.records import AvailabilityRecord
from ..telemetry.sink import TelemetrySink

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProbeExecutor:
    """Runs one ProbeDefinition against the shared HttpClient and reports it to the sink."""

    def __init__(
        self,
        http_client: HttpClient,
        telemetry_sink: TelemetrySink,
        *,
        test_location: str = "",
        clock: Callable[[], datetime] | None = None,
    ):
        self.http_client = http_client
        self.telemetry_sink = telemetry_sink
        self.test_location = test_location
        self._clock = clock or _utcnow

    async def execute(self, definition: ProbeDefinition) -> ProbeResult:
        timestamp = self._clock()
        started = time.monotonic()

        def elapsed() -> timedelta:
            return timedelta(seconds=time.monotonic() - started)

        logger.info("Probing endpoint: %s", definition.url)
        request = HttpRequest(
            url=definition.url,
            method=definition.http_method,
            headers=dict(definition.headers),
            timeout=float(definition.timeout_seconds),
        )

        try:
            response = await asyncio.wait_for(self.http_client.request(request), timeout=definition.timeout_seconds)
        except asyncio.TimeoutError:
            duration = max(elapsed(), timedelta(seconds=definition.timeout_seconds))
            result = ProbeResult.timed_out(definition, timestamp=timestamp, duration=duration)
        except Exception as exc:  # noqa: BLE001
            result = ProbeResult.unexpected(
                definition,
                timestamp=timestamp,
                duration=elapsed(),
                description=str(exc) or type(exc).__name__,
            )
            logger.debug("HttpClient raised while probing %s", definition.url, exc_info=exc)
        else:
            result = self._classify(definition, response, timestamp, elapsed())

        self._log_outcome(result)
        self._emit(result)
        return result

    def _classify(
        self,
        definition: ProbeDefinition,
        response: HttpResponse,
        timestamp: datetime,
        duration: timedelta,
    ) -> ProbeResult:
        if response.ok and response.status_code is not None:
            return ProbeResult.from_response(
                definition,
                timestamp=timestamp,
                duration=duration,
                status_code=response.status_code,
                reason_phrase=response.reason_phrase,
            )

        diagnostic = response.error_message or response.error_type or "no response received"
        if response.error_kind == ErrorKind.TIMEOUT:
            return ProbeResult.timed_out(definition, timestamp=timestamp, duration=duration)
        if response.error_kind == ErrorKind.TRANSPORT_ERROR:
            return ProbeResult.transport_failure(
                definition, timestamp=timestamp, duration=duration, diagnostic=diagnostic
            )
        return ProbeResult.unexpected(definition, timestamp=timestamp, duration=duration, description=diagnostic)

    def _log_outcome(self, result: ProbeResult) -> None:
        if result.success:
            logger.info("Probe succeeded for %s: %s in %.0fms", result.url, result.status_code, result.duration_ms)
        elif result.error_kind == ErrorKind.HTTP_FAILURE:
            logger.warning("Probe failed for %s: %s", result.url, result.error_message)
        elif result.error_kind == ErrorKind.TIMEOUT:
            logger.error("Probe timeout for %s: %s", result.url, result.error_message)
        elif result.error_kind == ErrorKind.TRANSPORT_ERROR:
            logger.error("Probe failed for %s: %s", result.url, result.error_message)
        else:
            logger.error("Unexpected error probing %s: %s", result.url, result.error_message)

    def _emit(self, result: ProbeResult) -> None:
        try:
            record = AvailabilityRecord.from_result(result, run_location=self.test_location)
            self.telemetry_sink.track_availability(record)
        except Exception:  # noqa: BLE001
            logger.exception("Telemetry sink rejected availability record for %s", result.url)


__all__ = ["ProbeExecutor"]
