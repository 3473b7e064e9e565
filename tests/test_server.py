import json

import httpx
import pytest

from crossref_mcp.server import CrossrefTools, build_server
from crossref_mcp.services import QueryDispatcher
from crossref_mcp.settings import Settings


def _dispatcher(status_code: int, payload: object) -> QueryDispatcher:
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code, json=payload))
    return QueryDispatcher(Settings(), client_factory=lambda: httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
async def test_server_registers_three_tools() -> None:
    server = build_server(_dispatcher(200, {}), Settings())
    tools = {tool.name: tool for tool in await server.list_tools()}

    assert set(tools) == {"searchByTitle", "searchByAuthor", "getWorkByDOI"}
    title_schema = tools["searchByTitle"].inputSchema
    assert title_schema["required"] == ["title"]
    assert title_schema["properties"]["rows"]["default"] == 5
    assert tools["getWorkByDOI"].description == "Retrieve a specific work by its DOI"


@pytest.mark.asyncio
async def test_tool_returns_envelope_json_with_camel_case_dates() -> None:
    payload = {
        "message": {
            "items": [
                {
                    "title": ["A quantum computer based on electrically controlled semiconductor spins"],
                    "author": [
                        {"given": "Daniel", "family": "Loss"},
                        {"given": "David P.", "family": "DiVincenzo"},
                    ],
                    "published": {"date-parts": [[1998, 1, 1]]},
                    "container-title": ["Physical Review A"],
                }
            ]
        }
    }
    tools = CrossrefTools(_dispatcher(200, payload))

    data = json.loads(await tools.search_by_author("Loss", 1))

    assert list(data) == ["status", "query", "count", "results"]
    assert data["status"] == "success"
    assert data["query"] == {"author": "Loss", "rows": 1}
    work = data["results"][0]
    assert work["published"] == {"dateParts": [1998, 1, 1], "dateString": "1998-1-1"}
    assert work["container"] == "Physical Review A"
    assert [author["name"] for author in work["authors"]] == ["Daniel Loss", "David P. DiVincenzo"]


@pytest.mark.asyncio
async def test_doi_tool_reports_not_found_and_error() -> None:
    not_found = json.loads(await CrossrefTools(_dispatcher(200, {"message": None})).get_work_by_doi("10.1/none"))
    failed = json.loads(await CrossrefTools(_dispatcher(404, {})).get_work_by_doi("10.1/none"))

    assert not_found == {
        "status": "not_found",
        "query": {"doi": "10.1/none"},
        "message": "No work found with DOI: 10.1/none",
    }
    assert failed == {
        "status": "error",
        "message": "API request failed with status 404",
        "query": {"doi": "10.1/none"},
    }


@pytest.mark.asyncio
async def test_title_tool_uses_default_rows() -> None:
    tools = CrossrefTools(_dispatcher(200, {"message": {"items": []}}))

    data = json.loads(await tools.search_by_title("nothing"))

    assert data == {"status": "no_results", "query": {"title": "nothing", "rows": 5}, "results": []}
