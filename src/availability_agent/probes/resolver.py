# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Probe configuration resolution.

A single raw string (typically the ``PROBE_URLS`` environment variable) is turned into
a validated ProbeBatchConfig. Three shapes are accepted, selected by the first
non-whitespace character:

- ``[`` : JSON array of URL strings (objects are also accepted as elements)
- ``{`` : one JSON object, or several separated by commas, each describing a probe
- otherwise: URLs separated by ``,`` or ``;``

The shape only matters during parsing; every path produces the same ProbeDefinition
sequence.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from ..errors import ConfigEmptyError, ConfigParseError
from ..models import ProbeBatchConfig, ProbeDefinition
from .naming import synthesize_test_name

logger = logging.getLogger(__name__)

DEFAULT_HTTP_METHOD = "GET"
_DELIMITERS_RE = re.compile(r"[,;]")

# Canonical field -> accepted keys after lower-casing and dropping "_" / "-".
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "url": ("url",),
    "test_name": ("testname", "name"),
    "http_method": ("httpmethod", "method"),
    "timeout_seconds": ("timeoutseconds", "timeout"),
    "headers": ("headers",),
}


def _normalize_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


def _canonical_fields(raw: Mapping[str, Any]) -> dict[str, Any]:
    lookup = {_normalize_key(str(key)): value for key, value in raw.items()}
    fields: dict[str, Any] = {}
    for canonical, aliases in _FIELD_ALIASES.items():
        for alias in aliases:
            if alias in lookup:
                fields[canonical] = lookup[alias]
                break
    return fields


def _load_json_array(text: str) -> list[Any]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"Failed to parse probe configuration: {exc}", diagnostic=str(exc)) from exc
    if not isinstance(parsed, list):
        raise ConfigParseError(
            f"Probe configuration must be a JSON array, got {type(parsed).__name__}",
            diagnostic=type(parsed).__name__,
        )
    return parsed


class _Resolver:
    def __init__(self, default_timeout_seconds: int, test_name_prefix: str):
        if default_timeout_seconds <= 0:
            raise ValueError("default_timeout_seconds must be positive")
        self.default_timeout_seconds = default_timeout_seconds
        self.test_name_prefix = test_name_prefix

    def simple(self, url: str) -> ProbeDefinition:
        return ProbeDefinition(
            url=url,
            test_name=synthesize_test_name(url, self.test_name_prefix),
            http_method=DEFAULT_HTTP_METHOD,
            timeout_seconds=self.default_timeout_seconds,
        )

    def from_object(self, index: int, raw: Mapping[str, Any]) -> ProbeDefinition:
        fields = _canonical_fields(raw)

        url = fields.get("url")
        if not isinstance(url, str) or not url.strip():
            raise ConfigParseError(f"Probe #{index}: 'url' must be a non-empty string", diagnostic=repr(url))
        url = url.strip()

        test_name = fields.get("test_name")
        if test_name is not None and not isinstance(test_name, str):
            raise ConfigParseError(f"Probe #{index}: 'testName' must be a string", diagnostic=repr(test_name))
        if not test_name or not test_name.strip():
            test_name = synthesize_test_name(url, self.test_name_prefix)

        method = fields.get("http_method")
        if method is not None and not isinstance(method, str):
            raise ConfigParseError(f"Probe #{index}: 'httpMethod' must be a string", diagnostic=repr(method))
        method = (method or DEFAULT_HTTP_METHOD).strip().upper() or DEFAULT_HTTP_METHOD

        timeout = fields.get("timeout_seconds")
        if timeout is None:
            timeout = 0
        if isinstance(timeout, bool) or not isinstance(timeout, int):
            raise ConfigParseError(f"Probe #{index}: 'timeoutSeconds' must be an integer", diagnostic=repr(timeout))
        if timeout <= 0:
            timeout = self.default_timeout_seconds

        return ProbeDefinition(
            url=url,
            test_name=test_name,
            http_method=method,
            timeout_seconds=timeout,
            headers=self._headers(index, fields.get("headers")),
        )

    def _headers(self, index: int, raw: Any) -> dict[str, str]:
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ConfigParseError(f"Probe #{index}: 'headers' must be an object", diagnostic=repr(raw))
        headers: dict[str, str] = {}
        for key, value in raw.items():
            if not isinstance(value, str):
                raise ConfigParseError(
                    f"Probe #{index}: header {key!r} must have a string value",
                    diagnostic=repr(value),
                )
            headers[str(key)] = value
        return headers

    def from_array(self, text: str) -> list[ProbeDefinition]:
        probes: list[ProbeDefinition] = []
        for index, item in enumerate(_load_json_array(text)):
            if isinstance(item, str):
                if item.strip():
                    probes.append(self.simple(item.strip()))
            elif isinstance(item, Mapping):
                probes.append(self.from_object(index, item))
            else:
                raise ConfigParseError(
                    f"Probe #{index}: expected a URL string or an object, got {type(item).__name__}",
                    diagnostic=repr(item),
                )
        return probes

    def from_objects(self, text: str) -> list[ProbeDefinition]:
        probes: list[ProbeDefinition] = []
        for index, item in enumerate(_load_json_array(f"[{text}]")):
            if not isinstance(item, Mapping):
                raise ConfigParseError(
                    f"Probe #{index}: expected an object, got {type(item).__name__}",
                    diagnostic=repr(item),
                )
            probes.append(self.from_object(index, item))
        return probes

    def from_delimited(self, text: str) -> list[ProbeDefinition]:
        tokens = (token.strip() for token in _DELIMITERS_RE.split(text))
        return [self.simple(token) for token in tokens if token]


def resolve(
    raw_probe_spec: str | None,
    *,
    default_timeout_seconds: int,
    test_name_prefix: str,
    test_location: str = "",
) -> ProbeBatchConfig:
    """
    Resolve a raw probe specification into a ProbeBatchConfig.

    Raises ConfigParseError for malformed JSON shapes and ConfigEmptyError when no
    probe definitions remain (including a missing or blank specification).
    """
    text = (raw_probe_spec or "").strip()
    resolver = _Resolver(default_timeout_seconds, test_name_prefix)

    if text.startswith("["):
        probes = resolver.from_array(text)
    elif text.startswith("{"):
        probes = resolver.from_objects(text)
    else:
        probes = resolver.from_delimited(text)

    if not probes:
        raise ConfigEmptyError("No probe URLs configured. Please set the PROBE_URLS environment variable.")

    logger.debug("Resolved %d probe definitions", len(probes))
    return ProbeBatchConfig(
        probes=tuple(probes),
        default_timeout_seconds=default_timeout_seconds,
        test_name_prefix=test_name_prefix,
        test_location=test_location,
    )


__all__ = ["DEFAULT_HTTP_METHOD", "resolve"]
