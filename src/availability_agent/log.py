# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for the availability agent."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("AVAILABILITY_AGENT_LOG_LEVEL", "INFO").upper()


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/host use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs each request at INFO.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.getLogger().level))


__all__ = ["setup_logging"]
