# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

import asyncio

from ..errors import ErrorKind
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests and dry runs.

    A stubbed entry may be an HttpResponse (returned as-is) or an exception instance
    (raised from `request`). `delays` holds per-URL latencies in seconds, applied
    before the stubbed outcome.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse | BaseException] | None = None,
        delays: dict[str, float] | None = None,
    ):
        self._responses = responses or {}
        self._delays = delays or {}
        self.requests: list[HttpRequest] = []
        self.completed: list[str] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | BaseException, *, delay: float | None = None) -> None:
        self._responses[url] = response
        if delay is not None:
            self._delays[url] = delay

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        delay = self._delays.get(request.url)
        if delay:
            await asyncio.sleep(delay)
        outcome = self._responses.get(request.url)
        self.completed.append(request.url)
        if outcome is None:
            return HttpResponse(
                ok=False,
                error_message="No stubbed response configured",
                error_kind=ErrorKind.TRANSPORT_ERROR,
            )
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True
