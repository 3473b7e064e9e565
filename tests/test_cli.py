from __future__ import annotations

import json

import httpx
from typer.testing import CliRunner

from crossref_mcp import cli
from crossref_mcp.services import QueryDispatcher

runner = CliRunner()


def _patch_upstream(monkeypatch, status_code: int, payload: object) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code, json=payload))

    def build(settings):
        return QueryDispatcher(settings, client_factory=lambda: httpx.AsyncClient(transport=transport))

    monkeypatch.setattr(cli, "_build_dispatcher", build)
    monkeypatch.setenv("CROSSREF_MCP_LOG_LEVEL", "CRITICAL")


def test_config_json_flag(monkeypatch):
    monkeypatch.setenv("CROSSREF_MCP_API_BASE", "http://localhost:9999/")
    monkeypatch.setenv("CROSSREF_MCP_MAILTO", "lab@example.org")
    monkeypatch.setenv("CROSSREF_MCP_LOG_LEVEL", "DEBUG")

    result = runner.invoke(cli.app, ["config", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload["api_base"] == "http://localhost:9999"
    assert payload["mailto"] == "lab@example.org"
    assert payload["log_level"] == "DEBUG"


def test_doi_json_output(monkeypatch):
    _patch_upstream(monkeypatch, 200, {"message": {"DOI": "10.1038/454554f", "title": ["Cloudy computing"]}})

    result = runner.invoke(cli.app, ["doi", "https://doi.org/10.1038/454554f", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "success"
    assert payload["query"] == {"doi": "https://doi.org/10.1038/454554f"}
    assert payload["result"]["title"] == "Cloudy computing"


def test_title_table_output(monkeypatch):
    _patch_upstream(
        monkeypatch,
        200,
        {"message": {"items": [{"DOI": "10.1/demo", "title": ["Demo"], "container-title": ["Demo Journal"]}]}},
    )

    result = runner.invoke(cli.app, ["title", "demo", "--rows", "1"])

    assert result.exit_code == 0
    assert "10.1/demo" in result.stdout
    assert "Demo Journal" in result.stdout


def test_author_error_exits_non_zero(monkeypatch):
    _patch_upstream(monkeypatch, 500, {})

    result = runner.invoke(cli.app, ["author", "Loss"])

    assert result.exit_code == 1
    assert "API request failed with status 500" in result.stdout


def test_author_json_echoes_query(monkeypatch):
    _patch_upstream(monkeypatch, 200, {"message": {"items": []}})

    result = runner.invoke(cli.app, ["author", "Loss", "--rows", "3", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload == {"status": "no_results", "query": {"author": "Loss", "rows": 3}, "results": []}
