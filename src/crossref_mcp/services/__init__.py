"""Service abstractions for the Crossref MCP server."""

from .dispatcher import (
    ById,
    ByAuthor,
    ByTitle,
    Query,
    QueryDispatcher,
    SELECT_FIELDS,
    UpstreamStatusError,
)
from .normalizer import normalize_work

__all__ = [
    "ById",
    "ByAuthor",
    "ByTitle",
    "Query",
    "QueryDispatcher",
    "SELECT_FIELDS",
    "UpstreamStatusError",
    "normalize_work",
]
