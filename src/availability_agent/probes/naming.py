# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Deterministic test-name synthesis from probe URLs."""

from __future__ import annotations

from urllib.parse import urlsplit


def _fallback_slug(raw: str) -> str:
    return raw.replace(":", "-").replace("/", "-").replace(".", "-")


def url_slug(url: str) -> str:
    """
    Derive a stable slug from a URL.

    Example:
      https://api.example.com/v1/health -> api-example-com-v1-health
      https://example.com               -> example-com

    Inputs without a scheme and host (relative paths, bare hostnames, garbage) fall back
    to replacing every ``:``, ``/`` and ``.`` in the raw string with ``-``.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return _fallback_slug(url)
    if not parts.scheme or not host:
        return _fallback_slug(url)

    host_slug = host.replace(".", "-")
    path_slug = parts.path.strip("/").replace("/", "-")
    return f"{host_slug}-{path_slug}" if path_slug else host_slug


def synthesize_test_name(url: str, prefix: str) -> str:
    return f"{prefix}-{url_slug(url)}"


__all__ = ["synthesize_test_name", "url_slug"]
