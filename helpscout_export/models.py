"""Data models for the export pipeline.

Conversations and threads keep the API payload as-is; only the fields the
pipeline itself needs (``id``, ``type``) are lifted onto the dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# The API's own ``threads`` key holds the thread count, so the fetched
# threads are stored next to it under a separate key.
THREADS_KEY = "threads_data"


@dataclass(frozen=True)
class Thread:
    """A single message thread belonging to one conversation."""

    id: int | str
    type: str | None
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.payload)


@dataclass
class Conversation:
    """A conversation from the collection endpoint, enriched with its threads."""

    id: int | str
    payload: dict[str, Any] = field(default_factory=dict)
    threads: list[Thread] | None = None

    def attach_threads(self, threads: list[Thread]) -> None:
        """Attach the fetched threads.  Allowed exactly once per conversation."""
        if self.threads is not None:
            raise ValueError(f"Threads already attached to conversation {self.id!r}")
        self.threads = list(threads)

    @property
    def is_enriched(self) -> bool:
        return self.threads is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the exported JSON shape."""
        data = dict(self.payload)
        data[THREADS_KEY] = [t.to_dict() for t in self.threads or []]
        return data
