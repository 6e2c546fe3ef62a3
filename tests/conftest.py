"""Shared fixtures and response builders for the exporter tests.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.  Routes are registered on a per-test router that does not assert
  every route was called (fatal-error tests deliberately leave routes unused).
- ``time.sleep`` is patched so throttling tests run instantly and can assert
  on the requested wait.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import httpx
import pytest
import respx

BASE = "https://api.helpscout.net/v2"
CONVERSATIONS = f"{BASE}/conversations?status=all"


def page_url(n: int) -> str:
    if n == 1:
        return CONVERSATIONS
    return f"{CONVERSATIONS}&page={n}"


def threads_url(conversation_id: Any) -> str:
    return f"{BASE}/conversations/{conversation_id}/threads"


def conversation_page(ids: list[Any], next_href: str | None = None) -> httpx.Response:
    """A 200 collection page holding one conversation per id."""
    body: dict[str, Any] = {
        "_embedded": {
            "conversations": [
                {"id": i, "subject": f"Subject {i}", "status": "closed", "threads": 1}
                for i in ids
            ]
        },
        "page": {"size": 25, "totalElements": len(ids)},
    }
    if next_href is not None:
        body["_links"] = {"next": {"href": next_href}}
    return httpx.Response(200, json=body)


def thread_page(thread_ids: list[Any], next_href: str | None = None) -> httpx.Response:
    """A 200 threads response holding one customer thread per id."""
    body: dict[str, Any] = {
        "_embedded": {
            "threads": [
                {"id": t, "type": "customer", "body": f"body of {t}"} for t in thread_ids
            ]
        }
    }
    if next_href is not None:
        body["_links"] = {"next": {"href": next_href}}
    return httpx.Response(200, json=body)


def throttled(retry_after: str | None = None) -> httpx.Response:
    headers = {}
    if retry_after is not None:
        headers["X-RateLimit-Retry-After"] = retry_after
    return httpx.Response(429, headers=headers, text="Too Many Requests")


@pytest.fixture
def api():
    """A respx router intercepting every ``httpx`` request made in the test."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def no_sleep():
    with patch("time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def client():
    with httpx.Client(headers={"Authorization": "Bearer test-token"}) as c:
        yield c
