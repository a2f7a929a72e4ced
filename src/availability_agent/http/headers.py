# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header lookup utilities.

HTTP header field names are case-insensitive (RFC 9110) while probe definitions keep
headers as plain dicts exactly as configured.
"""

from __future__ import annotations

from collections.abc import Mapping


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    """
    Return True when `name` is present in `headers` under any casing.

    Fast-paths common key casings before falling back to a full scan.
    """
    if not headers or not name:
        return False

    lower = name.lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            return True

    return any(str(key).lower() == lower for key in headers)


__all__ = ["has_header"]
