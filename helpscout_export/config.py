"""Exporter settings: API credentials, endpoints, HTTP limits, output file.

Every field reads a ``HELPSCOUT_*`` environment variable.  A ``.env`` next to
``pyproject.toml`` is merged in first; variables already exported in the
shell win over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# HELPSCOUT_ACCESS_TOKEN usually lives here
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Credentials / API
    # ------------------------------------------------------------------
    access_token: str = field(
        default_factory=lambda: os.environ.get("HELPSCOUT_ACCESS_TOKEN", "")
    )
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "HELPSCOUT_BASE_URL", "https://api.helpscout.net/v2"
        )
    )
    conversation_status: str = field(
        default_factory=lambda: os.environ.get("HELPSCOUT_CONVERSATION_STATUS", "all")
    )

    # ------------------------------------------------------------------
    # HTTP behaviour
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HELPSCOUT_REQUEST_TIMEOUT", "10.0"))
    )
    default_retry_after: int = field(
        default_factory=lambda: int(os.environ.get("HELPSCOUT_DEFAULT_RETRY_AFTER", "60"))
    )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    output_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("HELPSCOUT_OUTPUT_PATH", "conversations.json")
        )
    )

    @property
    def conversations_url(self) -> str:
        """Collection endpoint with the status filter applied."""
        return conversations_url(self.base_url, self.conversation_status)

    def threads_url(self, conversation_id: int | str) -> str:
        return threads_url(self.base_url, conversation_id)


def conversations_url(base_url: str, status: str) -> str:
    """Build the collection URL for *base_url* filtered by *status*."""
    return f"{base_url.rstrip('/')}/conversations?status={status}"


def threads_url(base_url: str, conversation_id: int | str) -> str:
    return f"{base_url.rstrip('/')}/conversations/{conversation_id}/threads"


# Module-level singleton, import this everywhere:
#   from helpscout_export.config import settings
settings = Settings()
