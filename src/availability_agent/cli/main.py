# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Availability agent CLI: run one probe batch per invocation."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from ..config import AgentSettings, load_agent_settings
from ..errors import ConfigError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import BatchReport
from ..probes.cache import resolve_from_settings
from ..runtime import AvailabilityAgent
from ..telemetry import TelemetrySink, create_telemetry_sink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PROBE_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Synthetic availability agent: probe configured HTTP endpoints once and report the results",
    )
    parser.add_argument(
        "--probe-urls",
        help="Probe specification (overrides PROBE_URLS): JSON array, JSON object(s), or comma/semicolon list",
    )
    parser.add_argument("--timeout", type=int, help="Default per-probe timeout in seconds (overrides PROBE_TIMEOUT_SECONDS)")
    parser.add_argument("--json", action="store_true", help="Output the batch report as JSON")
    parser.add_argument("--dry-run", action="store_true", help="Resolve and print probe definitions without sending requests")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for private endpoints with internal CAs)",
    )
    parser.add_argument("--log-level", help="Logging level (overrides AVAILABILITY_AGENT_LOG_LEVEL)")
    parser.add_argument(
        "--fail-on-probe-failure",
        action="store_true",
        help="Exit with status 1 when any probe fails",
    )
    return parser


def _apply_overrides(settings: AgentSettings, args: argparse.Namespace) -> AgentSettings:
    if args.probe_urls is not None:
        settings.probe_urls = args.probe_urls
    if args.timeout is not None:
        settings.default_timeout_seconds = args.timeout
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    return settings


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(report: BatchReport) -> None:
    if report.skipped:
        print("[AvailabilityAgent] No probes configured; nothing to do.")
        return
    summary = report.summary
    print(
        f"[AvailabilityAgent] {summary.success_count} succeeded, {summary.failure_count} failed "
        f"({report.test_location}, {summary.total_duration_millis:.0f}ms total)"
    )
    for result in report.results:
        status = "OK  " if result.success else "FAIL"
        detail = str(result.status_code) if result.success else (result.error_message or result.error_kind.value)
        print(f"- {status} {result.test_name} {result.url} [{result.duration_ms:.0f}ms] {detail}")


def _dry_run(settings: AgentSettings, as_json: bool) -> int:
    config = resolve_from_settings(settings)
    definitions = [probe.to_dict() for probe in config.probes] if config is not None else []
    if as_json:
        _print_json({"test_location": settings.test_location, "probes": definitions})
    elif not definitions:
        print("[AvailabilityAgent] No probes configured.")
    else:
        for item in definitions:
            print(f"- {item['test_name']}: {item['http_method']} {item['url']} (timeout {item['timeout_seconds']}s)")
    return EXIT_OK


async def _run(settings: AgentSettings, telemetry_sink: TelemetrySink) -> BatchReport:
    http_client = create_default_http_client(settings)
    async with AvailabilityAgent(settings, http_client=http_client, telemetry_sink=telemetry_sink) as agent:
        return await agent.run_batch()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be a positive number of seconds")
    setup_logging(args.log_level)

    settings = _apply_overrides(load_agent_settings(), args)
    logger.debug("Probe schedule (evaluated by host): %s", settings.probe_frequency)

    try:
        # stdout carries the JSON report.
        telemetry_sink = create_telemetry_sink(settings, stream=sys.stderr if args.json else None)
    except ValueError as exc:
        print(f"availability-agent: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        if args.dry_run:
            return _dry_run(settings, args.json)
        report = asyncio.run(_run(settings, telemetry_sink))
    except ConfigError as exc:
        print(f"availability-agent: configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.json:
        _print_json(report)
    else:
        _pretty_print(report)

    if args.fail_on_probe_failure and not report.all_succeeded:
        return EXIT_PROBE_FAILURE
    return EXIT_OK


def entrypoint() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    entrypoint()
