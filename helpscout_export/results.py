"""In-memory accumulation of exported conversations."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from helpscout_export.models import Conversation


class ResultSet:
    """Ordered conversations in page-then-record order.

    A conversation id is only ever stored once; re-delivered conversations
    are dropped.
    """

    def __init__(self) -> None:
        self._conversations: list[Conversation] = []
        self._seen: set[int | str] = set()

    def extend(self, conversations: Iterable[Conversation]) -> int:
        """Append *conversations* in order and return how many were new."""
        added = 0
        for conv in conversations:
            if conv.id in self._seen:
                print(f"[export] Skipping duplicate conversation {conv.id}")
                continue
            self._seen.add(conv.id)
            self._conversations.append(conv)
            added += 1
        return added

    def __len__(self) -> int:
        return len(self._conversations)

    def __iter__(self) -> Iterator[Conversation]:
        return iter(self._conversations)

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._seen

    @property
    def thread_count(self) -> int:
        return sum(len(c.threads or []) for c in self._conversations)

    def to_json_payload(self) -> list[dict[str, Any]]:
        return [c.to_dict() for c in self._conversations]
