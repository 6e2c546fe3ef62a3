"""Decoding of Help Scout HAL responses.

Both endpoints answer with the same envelope::

    {
      "_embedded": {"conversations": [...]},   # or "threads"
      "_links": {"next": {"href": "..."}},     # absent on the last page
      "page": {...}
    }

Only the embedded list, each item's ``id`` (an int or a string) and the next
link are checked.  A body with no ``_embedded`` at all is an empty page; an
``_embedded`` object without the expected list is malformed.
"""

from __future__ import annotations

from typing import Any

from helpscout_export.errors import DecodeError
from helpscout_export.models import Conversation, Thread


def _embedded_items(body: Any, key: str, url: str) -> list[dict[str, Any]]:
    if not isinstance(body, dict):
        raise DecodeError(url, f"expected a JSON object, got {type(body).__name__}")

    # An empty collection comes back without ``_embedded`` at all.
    embedded = body.get("_embedded")
    if embedded is None:
        return []
    if not isinstance(embedded, dict):
        raise DecodeError(url, "'_embedded' is not an object")

    if key not in embedded:
        raise DecodeError(url, f"'_embedded' has no '{key}' list")
    items = embedded[key]
    if not isinstance(items, list):
        raise DecodeError(url, f"'_embedded.{key}' is not a list")
    for item in items:
        if not isinstance(item, dict) or "id" not in item:
            raise DecodeError(url, f"item in '_embedded.{key}' has no 'id'")
        if not _is_valid_id(item["id"]):
            raise DecodeError(
                url, f"item in '_embedded.{key}' has a {type(item['id']).__name__} id"
            )
    return items


def _is_valid_id(value: Any) -> bool:
    # bool is an int subclass but never a record id
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def next_link(body: dict[str, Any], url: str) -> str:
    """Return ``_links.next.href`` or ``""`` when there is no next page."""
    links = body.get("_links") or {}
    if not isinstance(links, dict):
        raise DecodeError(url, "'_links' is not an object")
    nxt = links.get("next") or {}
    if not isinstance(nxt, dict):
        raise DecodeError(url, "'_links.next' is not an object")
    href = nxt.get("href") or ""
    if not isinstance(href, str):
        raise DecodeError(url, "'_links.next.href' is not a string")
    return href


def decode_conversation_page(body: Any, url: str) -> tuple[list[Conversation], str]:
    """Split a collection page into its conversations and the next-page link."""
    items = _embedded_items(body, "conversations", url)
    conversations = [Conversation(id=item["id"], payload=item) for item in items]
    return conversations, next_link(body, url)


def decode_thread_page(body: Any, url: str) -> tuple[list[Thread], str]:
    """Split a threads response into its threads and the next-page link."""
    items = _embedded_items(body, "threads", url)
    threads = [Thread(id=item["id"], type=item.get("type"), payload=item) for item in items]
    return threads, next_link(body, url)
