"""Fuente de subdominios: Quake (360.net).

Flujo:
- Elige una API key del pool; sin key la ejecución se marca `skipped`.
- Pide páginas de 100 registros en orden, recalculando el número de páginas
  con el `total` de cada respuesta.
- Entrega cada host en cuanto llega; cualquier error termina la ejecución
  con un único resultado de error.
- Pausa fija entre páginas (también tras la última) por el rate limit.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Sequence

import httpx
from pydantic import ValidationError

from adapters.credentials import RandomCredentialSelector
from adapters.http_client import build_async_client
from adapters.subdomain_sources.quake_api import (
    PAGE_SIZE,
    QueryRequest,
    QueryResponse,
    decode_response,
    normalize_host,
    page_count,
)
from adapters.subdomain_sources.stream import RunState, SourceRun
from core.cancellation import CancelToken, OperationCancelled
from core.config import AppSettings
from core.domain.models import ResultItem, RunStatistics
from core.errors import SourceError, TransportFailure, UpstreamFailure
from core.interfaces.source import CredentialSelector, SubdomainSource

logger = logging.getLogger(__name__)


class QuakeSource(SubdomainSource):
    name = "quake"
    page_size = PAGE_SIZE

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        selector: CredentialSelector | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._selector = selector or RandomCredentialSelector()
        self._transport = transport
        self._api_keys: list[str] = []
        self._last_statistics = RunStatistics()

    def is_default(self) -> bool:
        return True

    def has_recursive_support(self) -> bool:
        return False

    def needs_key(self) -> bool:
        return True

    def add_api_keys(self, keys: Sequence[str]) -> None:
        self._api_keys = list(keys)

    def statistics(self) -> RunStatistics:
        return self._last_statistics

    def run(self, domain: str, token: CancelToken | None = None) -> SourceRun:
        token = token or CancelToken()
        keys = list(self._api_keys)
        return SourceRun(
            self.name,
            lambda state: self._produce(domain, keys, token, state),
            on_close=self._remember,
        )

    def _remember(self, statistics: RunStatistics) -> None:
        self._last_statistics = statistics

    async def _produce(
        self,
        domain: str,
        keys: list[str],
        token: CancelToken,
        state: RunState,
    ) -> AsyncIterator[ResultItem]:
        api_key = self._selector.select(keys, self.name)
        if not api_key:
            state.skipped = True
            return

        headers = {"Content-Type": "application/json", "X-QuakeToken": api_key}
        async with build_async_client(self._settings, extra_headers=headers, transport=self._transport) as client:
            pages = 1
            current_page = 1
            while current_page <= pages:
                logger.debug(
                    "Querying %s for %s, current page %d of %d", self.name, domain, current_page, pages
                )
                try:
                    request = self._build_request(domain, current_page)
                    response = await self._fetch(client, request, token)
                except SourceError as exc:
                    logger.debug("%s failed on page %d: %s", self.name, current_page, exc)
                    yield ResultItem.failure(self.name, exc)
                    return

                if response.code != 0:
                    yield ResultItem.failure(
                        self.name, UpstreamFailure(self.name, response.message, code=response.code)
                    )
                    return

                if response.total > 0:
                    for host in response.hosts():
                        yield ResultItem.subdomain(self.name, normalize_host(host))
                    pages = page_count(response.total, self.page_size)

                await token.sleep(self._settings.quake_page_delay_seconds)
                current_page += 1

    def _build_request(self, domain: str, page: int) -> QueryRequest:
        try:
            return QueryRequest.for_page(domain, page, self.page_size)
        except ValidationError as exc:
            raise SourceError(self.name, f"invalid query for {domain!r}: {exc.errors()[0]['msg']}") from exc

    async def _fetch(self, client: httpx.AsyncClient, request: QueryRequest, token: CancelToken) -> QueryResponse:
        url = self._settings.quake_endpoint
        try:
            response = await token.guard(client.post(url, json=request.to_body()))
        except OperationCancelled as exc:
            raise TransportFailure(self.name, str(exc)) from exc
        except httpx.HTTPError as exc:
            raise TransportFailure(self.name, str(exc) or exc.__class__.__name__) from exc

        if response.status_code != 200:
            raise TransportFailure(
                self.name, f"unexpected status code {response.status_code} received from {url}"
            )
        return decode_response(response.content, source=self.name)
