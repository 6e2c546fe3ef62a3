"""Tests for the export runner and the JSON writer."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import BASE, conversation_page, page_url, thread_page, threads_url, throttled
from helpscout_export.errors import ApiError, TransportError
from helpscout_export.exporter import (
    build_client,
    collect_conversations,
    format_bearer,
    run_export,
)
from helpscout_export.models import Conversation, Thread
from helpscout_export.results import ResultSet
from helpscout_export.writer import write_conversations_json


def _serve_two_pages(api) -> None:
    api.get(page_url(1)).mock(return_value=conversation_page([1], page_url(2)))
    api.get(page_url(2)).mock(return_value=conversation_page([2]))
    api.get(threads_url(1)).mock(return_value=thread_page(["s1"]))
    api.get(threads_url(2)).mock(return_value=thread_page(["s2"]))


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------

class TestWriteConversationsJson:
    def test_writes_json_array(self, tmp_path) -> None:
        conv = Conversation(id=1, payload={"id": 1, "subject": "Héllo"})
        conv.attach_threads([Thread(id="s1", type="customer", payload={"id": "s1"})])
        results = ResultSet()
        results.extend([conv])

        path = write_conversations_json(results, tmp_path / "out" / "conversations.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == [{"id": 1, "subject": "Héllo", "threads_data": [{"id": "s1"}]}]

    def test_leaves_no_temp_files(self, tmp_path) -> None:
        write_conversations_json(ResultSet(), tmp_path / "conversations.json")

        assert [p.name for p in tmp_path.iterdir()] == ["conversations.json"]

    def test_replaces_existing_file(self, tmp_path) -> None:
        target = tmp_path / "conversations.json"
        target.write_text("stale", encoding="utf-8")

        write_conversations_json(ResultSet(), target)

        assert json.loads(target.read_text(encoding="utf-8")) == []


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class TestFormatBearer:
    def test_prefixes_token(self) -> None:
        assert format_bearer("abc") == "Bearer abc"


class TestBuildClient:
    def test_sets_authorization_and_timeout(self) -> None:
        with build_client("Bearer abc", timeout=3.0) as client:
            assert client.headers["Authorization"] == "Bearer abc"
            assert client.timeout.read == 3.0


class TestCollectConversations:
    def test_summary_counts(self, api, no_sleep) -> None:
        api.get(page_url(1)).mock(
            side_effect=[throttled("1"), conversation_page([1, 2])]
        )
        api.get(threads_url(1)).mock(return_value=thread_page(["a", "b"]))
        api.get(threads_url(2)).mock(return_value=thread_page(["c"]))

        with build_client("Bearer t") as client:
            results, summary = collect_conversations(client, base_url=BASE, status="all")

        assert [c.id for c in results] == [1, 2]
        assert summary.conversations == 2
        assert summary.threads == 3
        assert summary.pages == 1
        assert summary.throttle_waits == 1

    def test_status_filter_in_start_url(self, api) -> None:
        route = api.get(f"{BASE}/conversations?status=closed").mock(
            return_value=conversation_page([])
        )

        with build_client("Bearer t") as client:
            collect_conversations(client, base_url=BASE, status="closed")

        assert route.call_count == 1


class TestRunExport:
    def test_end_to_end(self, api, tmp_path) -> None:
        _serve_two_pages(api)
        output = tmp_path / "conversations.json"

        summary = run_export("secret", output, base_url=BASE)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert [(c["id"], [t["id"] for t in c["threads_data"]]) for c in data] == [
            (1, ["s1"]),
            (2, ["s2"]),
        ]
        assert summary.output_path == output
        assert summary.pages == 2
        assert all(
            call.request.headers["Authorization"] == "Bearer secret" for call in api.calls
        )

    def test_failure_writes_nothing(self, api, tmp_path) -> None:
        api.get(page_url(1)).mock(return_value=conversation_page([1], page_url(2)))
        api.get(threads_url(1)).mock(return_value=thread_page(["s1"]))
        api.get(page_url(2)).mock(return_value=httpx.Response(500, text="down"))
        output = tmp_path / "conversations.json"

        with pytest.raises(ApiError):
            run_export("secret", output, base_url=BASE)

        assert not output.exists()
        assert list(tmp_path.iterdir()) == []

    def test_timeout_writes_nothing(self, api, tmp_path) -> None:
        api.get(page_url(1)).mock(side_effect=httpx.ConnectTimeout("timed out"))
        output = tmp_path / "conversations.json"

        with pytest.raises(TransportError):
            run_export("secret", output, base_url=BASE)

        assert not output.exists()
