"""Crossref works lookup exposed as MCP tools."""

__version__ = "0.0.1"
