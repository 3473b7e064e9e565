"""Data models for Crossref works and the envelopes returned by each query."""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class RawAuthor(BaseModel):
    """Contributor entry as Crossref returns it."""

    model_config = ConfigDict(extra="ignore")

    given: str | None = None
    family: str | None = None


class RawDate(BaseModel):
    """Crossref partial date, e.g. ``{"date-parts": [[2019, 12, 1]]}``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date_parts: list[list[int | None]] | None = Field(default=None, alias="date-parts")


class RawWork(BaseModel):
    """A work record from the Crossref ``/works`` API.

    Every field is optional: the API omits keys freely and only the fields in
    the ``select`` list are ever requested.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: list[str] | None = None
    author: list[RawAuthor] | None = None
    published: RawDate | None = None
    doi: str | None = Field(default=None, alias="DOI")
    url: str | None = Field(default=None, alias="URL")
    type: str | None = None
    publisher: str | None = None
    issue: str | None = None
    volume: str | None = None
    abstract: str | None = None
    container_title: list[str] | None = Field(default=None, alias="container-title")


class NormalizedAuthor(BaseModel):
    given: str | None
    family: str | None
    name: str


class PublishedDate(BaseModel):
    date_parts: list[int | None] = Field(serialization_alias="dateParts")
    date_string: str | None = Field(serialization_alias="dateString")


class NormalizedWork(BaseModel):
    """Flat, total view of a work. Absent upstream fields are ``None`` or ``[]``."""

    title: str | None
    authors: list[NormalizedAuthor]
    published: PublishedDate | None
    type: str | None
    doi: str | None
    url: str | None
    container: str | None
    publisher: str | None
    issue: str | None
    volume: str | None
    abstract: str | None


class ErrorRecord(BaseModel):
    error: str = "No data available"


WorkRecord = Union[NormalizedWork, ErrorRecord]


class SearchSuccess(BaseModel):
    status: Literal["success"] = "success"
    query: dict[str, Any]
    count: int
    results: list[WorkRecord]


class NoResults(BaseModel):
    status: Literal["no_results"] = "no_results"
    query: dict[str, Any]
    results: list[WorkRecord] = Field(default_factory=list)


class WorkFound(BaseModel):
    status: Literal["success"] = "success"
    query: dict[str, Any]
    result: NormalizedWork


class NotFound(BaseModel):
    status: Literal["not_found"] = "not_found"
    query: dict[str, Any]
    message: str


class QueryFailed(BaseModel):
    status: Literal["error"] = "error"
    message: str
    query: dict[str, Any]


QueryEnvelope = Union[SearchSuccess, NoResults, WorkFound, NotFound, QueryFailed]


def envelope_to_dict(envelope: QueryEnvelope) -> dict[str, Any]:
    """Serialize an envelope with the camelCase keys callers expect."""
    return envelope.model_dump(mode="json", by_alias=True)
