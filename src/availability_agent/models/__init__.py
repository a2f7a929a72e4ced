# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for the availability agent."""

from ..errors import ErrorKind
from ..http.models import Headers, HttpRequest, HttpResponse
from .batch import BatchReport, BatchSummary, ProbeBatchConfig
from .probe import ProbeDefinition, ProbeResult, is_success_status

__all__ = [
    "BatchReport",
    "BatchSummary",
    "ErrorKind",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeBatchConfig",
    "ProbeDefinition",
    "ProbeResult",
    "is_success_status",
]
