# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe configuration resolution and execution."""

from .cache import ProbeConfigCache, resolve_from_settings
from .executor import ProbeExecutor
from .naming import synthesize_test_name, url_slug
from .orchestrator import ProbeOrchestrator
from .resolver import resolve

__all__ = [
    "ProbeConfigCache",
    "ProbeExecutor",
    "ProbeOrchestrator",
    "resolve",
    "resolve_from_settings",
    "synthesize_test_name",
    "url_slug",
]
