# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import DEFAULT_MAX_BODY_BYTES, AgentSettings, load_agent_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import has_header
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """Asynchronous httpx client wrapper shared by every probe in a batch."""

    def __init__(self, settings: AgentSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_agent_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=float(self.settings.default_timeout_seconds),
            verify=self.settings.verify_ssl,
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        if not has_header(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else float(self.settings.default_timeout_seconds)
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = DEFAULT_MAX_BODY_BYTES

        try:
            async with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                # Only the status line matters; drain a bounded prefix and drop the rest.
                bytes_read = 0
                truncated = False
                async for chunk in resp.aiter_raw():
                    bytes_read += len(chunk)
                    if bytes_read >= max_body_bytes:
                        truncated = True
                        break
        except Exception as exc:  # noqa: BLE001
            return HttpResponse.from_exception(exc, categorize_exception(exc))

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            reason_phrase=resp.reason_phrase,
            headers=dict(resp.headers),
            url=str(resp.url),
            meta={
                "body_truncated": truncated,
                "body_bytes_read": min(bytes_read, max_body_bytes),
                "body_bytes_limit": max_body_bytes,
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()
