"""High-level runner for a full conversation export.

``run_export`` wires together the authenticated HTTP client, the rate-limited
request primitive, the thread fetcher and the page walker, then writes the
result to disk.  Progress is printed to stdout by the components themselves;
the caller receives an :class:`ExportSummary`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx

from helpscout_export.config import conversations_url, settings
from helpscout_export.pages import PageWalker
from helpscout_export.ratelimit import RateLimitedRequest
from helpscout_export.results import ResultSet
from helpscout_export.threads import ThreadFetcher
from helpscout_export.writer import write_conversations_json


@dataclass
class ExportSummary:
    conversations: int
    threads: int
    pages: int
    throttle_waits: int
    output_path: Path | None = None


def format_bearer(access_token: str) -> str:
    """Return the ``Authorization`` header value for *access_token*."""
    return f"Bearer {access_token}"


def build_client(authorization: str, timeout: float | None = None) -> httpx.Client:
    """Create the shared client every request of a run goes through."""
    return httpx.Client(
        headers={"Authorization": authorization, "Accept": "application/json"},
        timeout=timeout if timeout is not None else settings.request_timeout,
    )


def collect_conversations(
    client: httpx.Client,
    *,
    base_url: str | None = None,
    status: str | None = None,
) -> tuple[ResultSet, ExportSummary]:
    """Walk every page of conversations and enrich each with its threads.

    Nothing is written; see :func:`run_export` for the full pipeline.

    Raises:
        helpscout_export.errors.ExportError: On any non-429 failure.
    """
    base_url = base_url or settings.base_url
    requester = RateLimitedRequest(client)
    walker = PageWalker(requester, ThreadFetcher(requester, base_url=base_url))

    results = walker.walk(conversations_url(base_url, status or settings.conversation_status))

    summary = ExportSummary(
        conversations=len(results),
        threads=results.thread_count,
        pages=walker.page_count,
        throttle_waits=requester.throttle_count,
    )
    return results, summary


def run_export(
    access_token: str,
    output_path: Path | None = None,
    *,
    base_url: str | None = None,
    status: str | None = None,
    timeout: float | None = None,
) -> ExportSummary:
    """Export every conversation, with its threads, to *output_path*.

    The output file is only written once the whole walk has succeeded; a
    fatal error leaves no file behind.

    Args:
        access_token: Help Scout OAuth access token (without ``Bearer``).
        output_path: Destination JSON file.  Defaults to
            ``settings.output_path``.
        base_url: API root override.
        status: Conversation status filter.  Defaults to ``all``.
        timeout: Per-request timeout in seconds.

    Returns:
        Counts for the run and the path that was written.
    """
    output_path = Path(output_path or settings.output_path)

    with build_client(format_bearer(access_token), timeout=timeout) as client:
        results, summary = collect_conversations(client, base_url=base_url, status=status)

    summary.output_path = write_conversations_json(results, output_path)
    print(
        f"[export] Wrote {summary.conversations} conversations "
        f"({summary.threads} threads) to {summary.output_path}"
    )
    return summary
