"""Help Scout export CLI entry-point.

Usage:
    python cli/main.py --help

Commands:
    export   → walk every conversation page and write the JSON export
    threads  → print the threads of one conversation (diagnostic)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from helpscout_export.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from helpscout_export.config import settings
from helpscout_export.errors import ExportError
from helpscout_export.exporter import build_client, format_bearer, run_export
from helpscout_export.ratelimit import RateLimitedRequest
from helpscout_export.threads import ThreadFetcher

app = typer.Typer(
    name="helpscout-export",
    help="Export Help Scout conversations and their threads to JSON.",
    no_args_is_help=True,
)

_TOKEN_OPTION = typer.Option(
    None,
    "--access-token",
    "--at",
    envvar="HELPSCOUT_ACCESS_TOKEN",
    help="Help Scout OAuth access token.",
)


def _require_token(access_token: Optional[str]) -> str:
    token = access_token or settings.access_token
    if not token:
        typer.echo("❌ An access token must be provided (--access-token / --at).")
        raise typer.Exit(code=1)
    return token


@app.command("export")
def export(
    access_token: Optional[str] = _TOKEN_OPTION,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output JSON file (default: conversations.json)."
    ),
    status: Optional[str] = typer.Option(None, help="Conversation status filter (default: all)."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API root override."),
    timeout: Optional[float] = typer.Option(None, help="Per-request timeout in seconds."),
) -> None:
    """Export every conversation, with its threads, to a single JSON file."""
    token = _require_token(access_token)

    typer.echo("[export] Starting conversation export …")
    try:
        summary = run_export(
            token,
            output,
            base_url=base_url,
            status=status,
            timeout=timeout,
        )
    except ExportError as e:
        typer.echo(f"❌ Export failed: {e}")
        raise typer.Exit(code=1)

    typer.echo(
        f"✅ Exported {summary.conversations} conversations, {summary.threads} threads "
        f"from {summary.pages} page(s); rate-limited {summary.throttle_waits} time(s)."
    )


@app.command("threads")
def threads(
    conversation_id: str = typer.Argument(..., help="Conversation id."),
    access_token: Optional[str] = _TOKEN_OPTION,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API root override."),
) -> None:
    """Print the threads of a single conversation as JSON."""
    token = _require_token(access_token)

    try:
        with build_client(format_bearer(token)) as client:
            fetcher = ThreadFetcher(RateLimitedRequest(client), base_url=base_url)
            result = fetcher.fetch(conversation_id)
    except ExportError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    typer.echo(json.dumps([t.to_dict() for t in result], ensure_ascii=False, indent=2))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
