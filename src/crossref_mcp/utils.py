"""Utility helpers for identifier cleanup and query encoding."""

from __future__ import annotations

import re
from urllib.parse import quote

DOI_RESOLVER_PREFIX = re.compile(r"^https?://doi\.org/")
# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.".
_URI_COMPONENT_SAFE = "!~*'()"


def strip_doi_resolver(doi: str) -> str:
    """Drop a leading ``http(s)://doi.org/`` so only the bare DOI remains.

    Only the resolver URL form is recognised; ``doi:10.1/x`` is returned as is.
    """
    return DOI_RESOLVER_PREFIX.sub("", doi, count=1)


def encode_query_value(value: str) -> str:
    """Percent-encode a query value the way browsers encode a URI component."""
    return quote(value, safe=_URI_COMPONENT_SAFE)
