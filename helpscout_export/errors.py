"""Exceptions raised by the export pipeline.

Only HTTP 429 is absorbed (by sleeping and retrying).  Everything below is
fatal: it unwinds to the caller and the export is aborted without writing any
output.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for every error the exporter raises on purpose."""


class TransportError(ExportError):
    """The request never produced an HTTP response (network error, timeout)."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"GET {url} failed: {detail}")


class ApiError(ExportError):
    """The API answered with a status other than 200 or 429."""

    def __init__(self, url: str, status_code: int, body: str) -> None:
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"GET {url} returned HTTP {status_code}: {body}")


class DecodeError(ExportError):
    """The response body is not JSON or does not have the expected shape."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Could not decode response from {url}: {detail}")
