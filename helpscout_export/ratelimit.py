"""Authenticated GET with Help Scout rate-limit handling.

``RateLimitedRequest`` is the single primitive both the page walk and the
thread fetch go through.  One call to :meth:`RateLimitedRequest.send` performs
one GET and classifies the response:

``Success``
    HTTP 200.  ``body`` is the decoded JSON payload.
``Throttled``
    HTTP 429.  The caller must sleep ``retry_after`` seconds and re-issue the
    *identical* request.
``Failure``
    Any other status.  Never retried.

Callers that do not need to observe throttling use :meth:`fetch`, which loops
over ``send``/``wait`` until the request either succeeds or fails for good.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Union

import httpx

from helpscout_export.config import settings
from helpscout_export.errors import ApiError, DecodeError, TransportError

RETRY_AFTER_HEADER = "X-RateLimit-Retry-After"


@dataclass(frozen=True)
class Success:
    body: Any


@dataclass(frozen=True)
class Throttled:
    retry_after: int


@dataclass(frozen=True)
class Failure:
    status_code: int
    message: str


Outcome = Union[Success, Throttled, Failure]


def parse_retry_after(value: str | None, default: int) -> int:
    """Return the wait in whole seconds, or *default* when the hint is unusable.

    Only plain decimal digits are accepted.  Absent, signed, fractional and
    zero values fall back to *default*.
    """
    if value is None or not value.strip().isdecimal():
        return default
    seconds = int(value)
    if seconds <= 0:
        return default
    return seconds


class RateLimitedRequest:
    """Issue GETs through a shared, pre-authenticated ``httpx.Client``.

    The client carries the ``Authorization: Bearer ...`` header and the
    per-request timeout; see :func:`helpscout_export.exporter.build_client`.
    """

    def __init__(self, client: httpx.Client, default_retry_after: int | None = None) -> None:
        self._client = client
        self._default_retry_after = (
            default_retry_after
            if default_retry_after is not None
            else settings.default_retry_after
        )
        self.throttle_count = 0

    def send(self, url: str) -> Outcome:
        """Perform exactly one GET against *url* and classify the result.

        Raises:
            TransportError: The request failed before a response arrived
                (connection error, timeout).  Not retried.
            DecodeError: A 200 response whose body is not valid JSON.
        """
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc

        if response.status_code == 200:
            try:
                return Success(response.json())
            except ValueError as exc:
                raise DecodeError(url, f"invalid JSON ({exc})") from exc

        if response.status_code == 429:
            header = response.headers.get(RETRY_AFTER_HEADER)
            seconds = parse_retry_after(header, self._default_retry_after)
            if seconds == self._default_retry_after and header != str(seconds):
                print(f"[rate-limit] {RETRY_AFTER_HEADER} was {header!r}; defaulting to {seconds}s")
            return Throttled(seconds)

        return Failure(response.status_code, response.text)

    def wait(self, throttled: Throttled) -> None:
        """Block for the throttle period."""
        self.throttle_count += 1
        print(f"[rate-limit] Sleeping for {throttled.retry_after} seconds due to rate limiting")
        time.sleep(throttled.retry_after)

    def fetch(self, url: str) -> Any:
        """GET *url*, sleeping through any number of 429s, and return the body.

        Raises:
            ApiError: The API answered with a status other than 200/429.
            TransportError, DecodeError: See :meth:`send`.
        """
        while True:
            outcome = self.send(url)
            if isinstance(outcome, Throttled):
                self.wait(outcome)
                continue
            return unwrap(url, outcome)


def unwrap(url: str, outcome: Success | Failure) -> Any:
    """Return the body of a ``Success`` or raise ``ApiError`` for a ``Failure``."""
    if isinstance(outcome, Failure):
        raise ApiError(url, outcome.status_code, outcome.message)
    return outcome.body
