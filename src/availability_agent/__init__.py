# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Availability agent package entrypoint.

A synthetic-availability monitor: on each scheduled invocation it resolves a flexible
probe specification into typed probe definitions, runs every probe concurrently with
its own deadline, classifies each outcome and hands one availability record per probe
to a telemetry sink. HTTP behavior is abstracted behind an injectable async client
interface, and domain objects are modeled with typed dataclasses.
"""

from .config import AgentSettings, load_agent_settings
from .errors import ConfigEmptyError, ConfigError, ConfigParseError, ErrorKind
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client
from .log import setup_logging
from .models import BatchReport, BatchSummary, ProbeBatchConfig, ProbeDefinition, ProbeResult
from .probes import ProbeConfigCache, ProbeExecutor, ProbeOrchestrator, resolve, synthesize_test_name
from .runtime import AvailabilityAgent
from .telemetry import (
    AvailabilityRecord,
    JsonLinesTelemetrySink,
    LoggingTelemetrySink,
    RecordingTelemetrySink,
    TelemetrySink,
)
from .version import __version__

__all__ = [
    "AgentSettings",
    "AvailabilityAgent",
    "AvailabilityRecord",
    "BatchReport",
    "BatchSummary",
    "ConfigEmptyError",
    "ConfigError",
    "ConfigParseError",
    "ErrorKind",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "JsonLinesTelemetrySink",
    "LoggingTelemetrySink",
    "ProbeBatchConfig",
    "ProbeConfigCache",
    "ProbeDefinition",
    "ProbeExecutor",
    "ProbeOrchestrator",
    "ProbeResult",
    "RecordingTelemetrySink",
    "StubHttpClient",
    "TelemetrySink",
    "create_default_http_client",
    "load_agent_settings",
    "resolve",
    "setup_logging",
    "synthesize_test_name",
    "__version__",
]
