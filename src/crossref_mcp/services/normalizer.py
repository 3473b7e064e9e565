"""Reshape Crossref work records into the flat record returned to callers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from crossref_mcp.models import (
    ErrorRecord,
    NormalizedAuthor,
    NormalizedWork,
    PublishedDate,
    RawAuthor,
    RawDate,
    RawWork,
)


def normalize_work(raw: RawWork | Mapping[str, Any] | None) -> NormalizedWork | ErrorRecord:
    """Map one upstream work onto a :class:`NormalizedWork`.

    ``None`` yields an :class:`ErrorRecord`. Mappings are validated into
    :class:`RawWork` first, so a structurally invalid payload raises
    ``pydantic.ValidationError``.
    """
    if raw is None:
        return ErrorRecord()
    work = raw if isinstance(raw, RawWork) else RawWork.model_validate(raw)
    return NormalizedWork(
        title=_first(work.title),
        authors=[_normalize_author(entry) for entry in work.author or []],
        published=_normalize_published(work.published),
        type=work.type or None,
        doi=work.doi or None,
        url=work.url or None,
        container=_first(work.container_title),
        publisher=work.publisher or None,
        issue=work.issue or None,
        volume=work.volume or None,
        abstract=work.abstract or None,
    )


def _first(values: list[str] | None) -> str | None:
    if not values:
        return None
    return values[0] or None


def _normalize_author(entry: RawAuthor) -> NormalizedAuthor:
    given = entry.given or None
    family = entry.family or None
    return NormalizedAuthor(
        given=given,
        family=family,
        name=f"{given or ''} {family or ''}".strip(),
    )


def _normalize_published(published: RawDate | None) -> PublishedDate | None:
    if published is None:
        return None
    parts = published.date_parts[0] if published.date_parts else []
    date_string = "-".join("" if part is None else str(part) for part in parts)
    return PublishedDate(date_parts=list(parts), date_string=date_string or None)
