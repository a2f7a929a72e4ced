# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade: the batch entry point invoked by the scheduling host."""

from __future__ import annotations

import logging
from contextlib import suppress
from datetime import datetime, timezone

from .config import AgentSettings, load_agent_settings
from .errors import ConfigError
from .http.client import HttpClient, create_default_http_client
from .models import BatchReport, ProbeBatchConfig
from .probes.cache import ProbeConfigCache, resolve_from_settings
from .probes.executor import ProbeExecutor
from .probes.orchestrator import ProbeOrchestrator
from .telemetry.aggregator import emit_batch_summary, summarize
from .telemetry.sink import TelemetrySink, create_telemetry_sink

logger = logging.getLogger(__name__)


class AvailabilityAgent:
    """
    Wires settings, the shared HTTP client, the telemetry sink and the cached probe
    configuration together.

    One instance is meant to live for the whole process; `run_batch` is called once per
    scheduled invocation.
    """

    def __init__(
        self,
        settings: AgentSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        telemetry_sink: TelemetrySink | None = None,
        config_cache: ProbeConfigCache | None = None,
    ):
        self.settings = settings or load_agent_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.telemetry_sink = telemetry_sink or create_telemetry_sink(self.settings)
        self.config_cache = config_cache or ProbeConfigCache(lambda: resolve_from_settings(self.settings))

    def get_configuration(self) -> ProbeBatchConfig | None:
        return self.config_cache.get()

    async def run_batch(
        self,
        *,
        invoked_at: datetime | None = None,
        next_run: datetime | None = None,
    ) -> BatchReport:
        invoked_at = invoked_at or datetime.now(timezone.utc)
        logger.info("Availability probe batch executed at: %s", invoked_at.isoformat())

        try:
            config = self.get_configuration()
        except ConfigError:
            logger.exception("Error executing availability probes")
            raise

        test_location = config.test_location if config is not None else self.settings.test_location
        if config is None:
            logger.warning("No probe URLs configured. Skipping execution.")
            report = BatchReport(invoked_at=invoked_at, test_location=test_location, next_run=next_run, skipped=True)
        else:
            logger.info("Executing %d availability probes", len(config.probes))
            executor = ProbeExecutor(self.http_client, self.telemetry_sink, test_location=test_location)
            results = await ProbeOrchestrator(executor).execute_all(config.probes)
            summary = summarize(results)
            emit_batch_summary(self.telemetry_sink, summary, test_location=test_location)
            report = BatchReport(
                invoked_at=invoked_at,
                test_location=test_location,
                results=results,
                summary=summary,
                next_run=next_run,
            )

        if next_run is not None:
            logger.info("Next timer schedule at: %s", next_run.isoformat())
        return report

    async def aclose(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "aclose"):
                await self.http_client.aclose()

    async def __aenter__(self) -> AvailabilityAgent:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
