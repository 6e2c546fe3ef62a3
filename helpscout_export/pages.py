"""Walk the paginated conversations collection.

The walk is a small state machine over the URL being fetched::

    FETCHING --429--> THROTTLED --sleep--> FETCHING (same URL)
    FETCHING --200, next link--> FETCHING (next URL)
    FETCHING --200, no next link / next == current--> DONE

Every conversation on a page is enriched with its threads, in page order and
one at a time, before the page is appended to the :class:`ResultSet`.  Any
error other than a 429 propagates out of :meth:`PageWalker.walk`.
"""

from __future__ import annotations

from enum import Enum

from helpscout_export.config import settings
from helpscout_export.decoding import decode_conversation_page
from helpscout_export.ratelimit import RateLimitedRequest, Throttled, unwrap
from helpscout_export.results import ResultSet
from helpscout_export.threads import ThreadFetcher


class WalkState(str, Enum):
    FETCHING = "fetching"
    THROTTLED = "throttled"
    DONE = "done"


class PageWalker:
    def __init__(
        self,
        requester: RateLimitedRequest,
        thread_fetcher: ThreadFetcher,
        results: ResultSet | None = None,
    ) -> None:
        self._requester = requester
        self._thread_fetcher = thread_fetcher
        self.results = results if results is not None else ResultSet()
        self.state = WalkState.FETCHING
        self.page_count = 0

    def fetch_page(self, url: str) -> str:
        """Fetch and process one page; return the URL to fetch next.

        Returns *url* itself after a 429 (the caller retries it), the next
        page link after a successful page, or ``""`` when the collection is
        exhausted.  A next link identical to *url* is treated as exhausted.
        """
        outcome = self._requester.send(url)
        if isinstance(outcome, Throttled):
            self.state = WalkState.THROTTLED
            self._requester.wait(outcome)
            return url

        body = unwrap(url, outcome)
        conversations, next_url = decode_conversation_page(body, url)
        self.page_count += 1

        total = len(conversations)
        print(f"[pages] Fetched {total} conversations. Fetching threads now...")
        for i, conv in enumerate(conversations, start=1):
            print(f"[threads] Fetching threads for conversation {conv.id} [{i}/{total}]")
            conv.attach_threads(self._thread_fetcher.fetch(conv.id))

        self.results.extend(conversations)

        if next_url == url:
            return ""
        return next_url

    def walk(self, start_url: str | None = None) -> ResultSet:
        """Follow next links from *start_url* until the collection is exhausted."""
        url = start_url or settings.conversations_url
        self.state = WalkState.FETCHING

        while self.state is not WalkState.DONE:
            url = self.fetch_page(url)
            if self.state is WalkState.THROTTLED:
                self.state = WalkState.FETCHING
            elif not url:
                self.state = WalkState.DONE

        return self.results
