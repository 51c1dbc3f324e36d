"""Fixtures compartidas: settings aislados y un servidor Quake falso."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from core.config import AppSettings


def quake_page(
    hosts: list[str] | None = None,
    *,
    total: int | None = None,
    code: int = 0,
    message: str = "Successful.",
) -> dict[str, Any]:
    hosts = hosts or []
    return {
        "code": code,
        "message": message,
        "data": [{"service": {"http": {"host": host}}} for host in hosts],
        "meta": {"pagination": {"total": len(hosts) if total is None else total}},
    }


class FakeQuake:
    """Responde una entrada de `pages` por request, en orden.

    Cada entrada puede ser un dict (JSON 200), un `httpx.Response` o una
    excepción a lanzar.
    """

    def __init__(self, pages: list[Any]) -> None:
        self.pages = list(pages)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        index = len(self.requests)
        self.requests.append(request)
        entry = self.pages[index]
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, httpx.Response):
            return entry
        return httpx.Response(200, json=entry)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def starts(self) -> list[int]:
        return [json.loads(request.content)["start"] for request in self.requests]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        quake_api_keys="test-key",
        quake_page_delay_seconds=0,
        http_timeout_seconds=5,
    )
