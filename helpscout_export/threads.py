"""Fetch the message threads of a single conversation."""

from __future__ import annotations

from helpscout_export.config import settings, threads_url
from helpscout_export.decoding import decode_thread_page
from helpscout_export.models import Thread
from helpscout_export.ratelimit import RateLimitedRequest


class ThreadFetcher:
    """Load ``/conversations/{id}/threads`` for one conversation at a time.

    A call either returns every thread of the conversation or raises; there
    is no partial result.  Throttling is absorbed by
    :meth:`RateLimitedRequest.fetch`.
    """

    def __init__(self, requester: RateLimitedRequest, base_url: str | None = None) -> None:
        self._requester = requester
        self._base_url = (base_url or settings.base_url).rstrip("/")

    def thread_url(self, conversation_id: int | str) -> str:
        return threads_url(self._base_url, conversation_id)

    def fetch(self, conversation_id: int | str) -> list[Thread]:
        """Return all threads of *conversation_id*, in API order.

        The endpoint normally answers in a single page.  If a next link is
        present it is followed, stopping when the link repeats the URL just
        fetched.
        """
        threads: list[Thread] = []
        url = self.thread_url(conversation_id)
        while url:
            body = self._requester.fetch(url)
            page, next_url = decode_thread_page(body, url)
            threads.extend(page)
            url = "" if next_url == url else next_url

        return threads
