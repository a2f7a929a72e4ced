# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Concurrent fan-out of a probe batch."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from ..models import ProbeDefinition, ProbeResult
from .executor import ProbeExecutor

logger = logging.getLogger(__name__)


class ProbeOrchestrator:
    """
    Launch every probe at once and join them all.

    Results are correlated by position, so the output order always matches the input
    order regardless of completion order. Each probe carries its own deadline inside the
    executor; there is no batch-wide deadline and no concurrency cap.
    """

    def __init__(self, executor: ProbeExecutor):
        self.executor = executor

    async def execute_all(self, definitions: Sequence[ProbeDefinition]) -> list[ProbeResult]:
        if not definitions:
            return []

        outcomes = await asyncio.gather(
            *(self.executor.execute(definition) for definition in definitions),
            return_exceptions=True,
        )

        results: list[ProbeResult] = []
        for definition, outcome in zip(definitions, outcomes):
            if isinstance(outcome, ProbeResult):
                results.append(outcome)
                continue
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            logger.error("Probe task for %s raised instead of returning a result", definition.url, exc_info=outcome)
            results.append(
                ProbeResult.unexpected(
                    definition,
                    timestamp=datetime.now(timezone.utc),
                    duration=timedelta(0),
                    description=str(outcome) or type(outcome).__name__,
                )
            )
        return results


__all__ = ["ProbeOrchestrator"]
