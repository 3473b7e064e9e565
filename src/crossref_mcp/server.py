"""MCP tool handlers and server construction."""

import json
from typing import Annotated, Optional

import structlog
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from crossref_mcp import __version__
from crossref_mcp.models import QueryEnvelope, envelope_to_dict
from crossref_mcp.services import QueryDispatcher
from crossref_mcp.services.dispatcher import DEFAULT_ROWS
from crossref_mcp.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

SERVER_NAME = "Crossref MCP Server"
SERVER_INSTRUCTIONS = (
    "Look up scholarly works in Crossref by title, author or DOI. "
    "Every tool returns a JSON object whose 'status' is one of "
    "success, no_results, not_found or error."
)


def render_envelope(envelope: QueryEnvelope) -> str:
    """Serialize an envelope as the pretty-printed JSON text sent to clients."""
    return json.dumps(envelope_to_dict(envelope), indent=2)


class CrossrefTools:
    """Tool handlers bound to one dispatcher."""

    def __init__(self, dispatcher: QueryDispatcher) -> None:
        self._dispatcher = dispatcher

    async def search_by_title(
        self,
        title: Annotated[str, Field(description="The title to search for")],
        rows: Annotated[int, Field(description="Number of results to return")] = DEFAULT_ROWS,
    ) -> str:
        """Search for works by title in Crossref."""
        return render_envelope(await self._dispatcher.search_by_title(title, rows))

    async def search_by_author(
        self,
        author: Annotated[str, Field(description="The author name to search for")],
        rows: Annotated[int, Field(description="Number of results to return")] = DEFAULT_ROWS,
    ) -> str:
        """Search for works by author in Crossref."""
        return render_envelope(await self._dispatcher.search_by_author(author, rows))

    async def get_work_by_doi(
        self,
        doi: Annotated[str, Field(description="The DOI to look up")],
    ) -> str:
        """Retrieve a specific work by its DOI."""
        return render_envelope(await self._dispatcher.get_work_by_doi(doi))


def build_server(dispatcher: Optional[QueryDispatcher] = None, settings: Optional[Settings] = None) -> FastMCP:
    """Create a FastMCP server exposing the three Crossref tools."""
    settings = settings or get_settings()
    dispatcher = dispatcher or QueryDispatcher(settings)
    tools = CrossrefTools(dispatcher)
    server = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)
    server.add_tool(
        tools.search_by_title,
        name="searchByTitle",
        description="Search for works by title in Crossref",
    )
    server.add_tool(
        tools.search_by_author,
        name="searchByAuthor",
        description="Search for works by author in Crossref",
    )
    server.add_tool(
        tools.get_work_by_doi,
        name="getWorkByDOI",
        description="Retrieve a specific work by its DOI",
    )
    logger.debug("server.built", name=SERVER_NAME, version=__version__)
    return server
