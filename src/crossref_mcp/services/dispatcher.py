"""Single dispatch routine behind every Crossref query tool."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

import httpx
import structlog

from crossref_mcp.models import (
    NoResults,
    NotFound,
    QueryEnvelope,
    QueryFailed,
    SearchSuccess,
    WorkFound,
)
from crossref_mcp.services.normalizer import normalize_work
from crossref_mcp.settings import Settings
from crossref_mcp.utils import encode_query_value, strip_doi_resolver

logger = structlog.get_logger(__name__)

SELECT_FIELDS = ",".join(
    [
        "DOI",
        "URL",
        "abstract",
        "author",
        "container-title",
        "issue",
        "published",
        "publisher",
        "title",
        "type",
        "volume",
    ]
)
DEFAULT_ROWS = 5


@dataclass(frozen=True, slots=True)
class ByTitle:
    title: str
    rows: int = DEFAULT_ROWS

    def echo(self) -> dict[str, Any]:
        return {"title": self.title, "rows": self.rows}

    def path(self, settings: Settings) -> str:
        return (
            f"{settings.api_base}/works?query.title={encode_query_value(self.title)}"
            f"&rows={self.rows}&select={SELECT_FIELDS}"
        )


@dataclass(frozen=True, slots=True)
class ByAuthor:
    author: str
    rows: int = DEFAULT_ROWS

    def echo(self) -> dict[str, Any]:
        return {"author": self.author, "rows": self.rows}

    def path(self, settings: Settings) -> str:
        return (
            f"{settings.api_base}/works?query.author={encode_query_value(self.author)}"
            f"&rows={self.rows}&select={SELECT_FIELDS}"
        )


@dataclass(frozen=True, slots=True)
class ById:
    doi: str

    def echo(self) -> dict[str, Any]:
        return {"doi": self.doi}

    def path(self, settings: Settings) -> str:
        return f"{settings.api_base}/works/{strip_doi_resolver(self.doi)}?select={SELECT_FIELDS}"


Query = Union[ByTitle, ByAuthor, ById]
ClientFactory = Callable[[], httpx.AsyncClient]


class UpstreamStatusError(Exception):
    """Crossref answered with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"API request failed with status {status_code}")
        self.status_code = status_code


class QueryDispatcher:
    """Runs one Crossref request per query and classifies the outcome.

    Each call opens its own client from ``client_factory``, so concurrent
    invocations share nothing.
    """

    def __init__(self, settings: Settings, client_factory: ClientFactory | None = None) -> None:
        self._settings = settings
        self._client_factory = client_factory or self._default_client

    async def search_by_title(self, title: str, rows: int = DEFAULT_ROWS) -> QueryEnvelope:
        return await self.dispatch(ByTitle(title=title, rows=rows))

    async def search_by_author(self, author: str, rows: int = DEFAULT_ROWS) -> QueryEnvelope:
        return await self.dispatch(ByAuthor(author=author, rows=rows))

    async def get_work_by_doi(self, doi: str) -> QueryEnvelope:
        return await self.dispatch(ById(doi=doi))

    async def dispatch(self, query: Query) -> QueryEnvelope:
        echo = query.echo()
        kind = type(query).__name__
        try:
            url = query.path(self._settings)
            logger.info("dispatch.request", kind=kind, url=url)
            message = await self._fetch_message(url)
            return self._classify(query, echo, message)
        except UpstreamStatusError as exc:
            logger.warning("dispatch.http_error", kind=kind, status_code=exc.status_code)
            return QueryFailed(message=str(exc), query=echo)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError covers unencodable input, undecodable JSON and malformed payloads.
            logger.warning("dispatch.transport_error", kind=kind, error=str(exc))
            return QueryFailed(message=str(exc), query=echo)

    async def _fetch_message(self, url: str) -> Any:
        async with self._client_factory() as client:
            response = await client.get(url, headers=self._settings.request_headers)
        if not response.is_success:
            raise UpstreamStatusError(response.status_code)
        data = response.json()
        if not isinstance(data, dict):
            return None
        return data.get("message")

    def _classify(self, query: Query, echo: dict[str, Any], message: Any) -> QueryEnvelope:
        if isinstance(query, ById):
            if not message:
                logger.info("dispatch.empty", doi=query.doi)
                return NotFound(query=echo, message=f"No work found with DOI: {query.doi}")
            result = normalize_work(message)
            logger.info("dispatch.success", doi=query.doi)
            return WorkFound(query=echo, result=result)

        works = (message.get("items") if isinstance(message, dict) else None) or []
        if not isinstance(works, list):
            raise ValueError(f"Malformed work list: expected an array, got {type(works).__name__}")
        if not works:
            logger.info("dispatch.empty", query=echo)
            return NoResults(query=echo)
        results = [normalize_work(work) for work in works]
        logger.info("dispatch.success", query=echo, count=len(results))
        return SearchSuccess(query=echo, count=len(results), results=results)

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._settings.timeout, follow_redirects=True)
