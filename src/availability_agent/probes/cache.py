# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Process-wide holder for the resolved probe configuration."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..config import AgentSettings
from ..models import ProbeBatchConfig
from .resolver import resolve

logger = logging.getLogger(__name__)

_UNSET = object()


def resolve_from_settings(settings: AgentSettings) -> ProbeBatchConfig | None:
    """
    Resolve the batch described by `settings`.

    Returns None when no probe specification was supplied at all, which callers treat
    as "nothing to do" rather than an error.
    """
    if settings.probe_urls is None or not settings.probe_urls.strip():
        return None
    return resolve(
        settings.probe_urls,
        default_timeout_seconds=settings.default_timeout_seconds,
        test_name_prefix=settings.test_name_prefix,
        test_location=settings.test_location,
    )


class ProbeConfigCache:
    """
    Resolve once, lazily, on first access; immutable afterwards.

    Double-checked locking keeps concurrent first callers from resolving twice. A
    failed resolution is not cached, so the next call tries again.
    """

    def __init__(self, loader: Callable[[], ProbeBatchConfig | None]):
        self._loader = loader
        self._lock = threading.Lock()
        self._value: object = _UNSET

    @property
    def loaded(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> ProbeBatchConfig | None:
        value = self._value
        if value is _UNSET:
            with self._lock:
                value = self._value
                if value is _UNSET:
                    value = self._loader()
                    self._value = value
                    logger.info(
                        "Probe configuration loaded: %s",
                        f"{len(value)} probes" if value is not None else "no probes configured",
                    )
        return value  # type: ignore[return-value]

    def invalidate(self) -> None:
        with self._lock:
            self._value = _UNSET


__all__ = ["ProbeConfigCache", "resolve_from_settings"]
