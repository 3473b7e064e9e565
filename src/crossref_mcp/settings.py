"""Configuration helpers for the Crossref MCP server."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_API_BASE = "https://api.crossref.org"
DEFAULT_USER_AGENT = "Crossref MCP Server"


class Settings(BaseModel):
    """Runtime configuration loaded from env vars with sensible defaults."""

    api_base: str = DEFAULT_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    mailto: str | None = None
    timeout: float = 30.0
    log_level: str = "INFO"

    @property
    def request_headers(self) -> dict[str, str]:
        """Headers sent with every Crossref request."""
        agent = self.user_agent
        if self.mailto:
            agent = f"{agent} (mailto:{self.mailto})"
        return {"User-Agent": agent}

    @classmethod
    def load(cls) -> "Settings":
        load_dotenv()
        return cls(
            api_base=os.environ.get("CROSSREF_MCP_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            user_agent=os.environ.get("CROSSREF_MCP_USER_AGENT", DEFAULT_USER_AGENT),
            mailto=os.environ.get("CROSSREF_MCP_MAILTO") or None,
            timeout=float(os.environ.get("CROSSREF_MCP_TIMEOUT", "30")),
            log_level=os.environ.get("CROSSREF_MCP_LOG_LEVEL", "INFO"),
        )


def get_settings() -> Settings:
    """Convenience accessor for lazy modules."""
    return Settings.load()
