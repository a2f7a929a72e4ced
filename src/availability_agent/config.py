# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the availability agent."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"AvailabilityAgent/{__version__}"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_TEST_NAME_PREFIX = "Private-Endpoint"
DEFAULT_TEST_LOCATION = "VNET-Integration"
DEFAULT_PROBE_FREQUENCY = "0 */5 * * * *"
DEFAULT_MAX_BODY_BYTES = 64 * 1024


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value


@dataclass
class AgentSettings:
    """Scalar settings plus the raw probe specification string."""

    probe_urls: str | None = None
    default_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    test_name_prefix: str = DEFAULT_TEST_NAME_PREFIX
    test_location: str = DEFAULT_TEST_LOCATION
    probe_frequency: str = DEFAULT_PROBE_FREQUENCY
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    allow_redirects: bool = True
    telemetry_sink: str = "log"
    role_name: str = "AvailabilityAgent"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    @classmethod
    def from_env(cls) -> "AgentSettings":
        """Create settings from environment variables (evaluated at call time)."""
        default_timeout = _int_env("PROBE_TIMEOUT_SECONDS", cls.default_timeout_seconds)
        if default_timeout <= 0:
            default_timeout = cls.default_timeout_seconds
        return cls(
            probe_urls=_optional_str_env("PROBE_URLS"),
            default_timeout_seconds=default_timeout,
            test_name_prefix=os.getenv("TEST_NAME_PREFIX", cls.test_name_prefix),
            test_location=os.getenv("TEST_LOCATION", cls.test_location),
            probe_frequency=os.getenv("PROBE_FREQUENCY", cls.probe_frequency),
            user_agent=os.getenv("AVAILABILITY_AGENT_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("AVAILABILITY_AGENT_VERIFY_SSL", cls.verify_ssl),
            allow_redirects=_bool_env("AVAILABILITY_AGENT_REDIRECTS", cls.allow_redirects),
            telemetry_sink=os.getenv("AVAILABILITY_AGENT_TELEMETRY_SINK", cls.telemetry_sink).strip().lower(),
            role_name=os.getenv("AVAILABILITY_AGENT_ROLE_NAME", cls.role_name),
            max_body_bytes=_int_env("AVAILABILITY_AGENT_MAX_BODY_BYTES", cls.max_body_bytes),
        )


def load_agent_settings() -> AgentSettings:
    """Load agent settings from environment with sensible defaults."""
    return AgentSettings.from_env()
