"""Help Scout conversation export: paginated fetch, thread enrichment, JSON output."""

from helpscout_export.errors import ApiError, DecodeError, ExportError, TransportError
from helpscout_export.exporter import ExportSummary, collect_conversations, run_export
from helpscout_export.models import Conversation, Thread
from helpscout_export.pages import PageWalker
from helpscout_export.ratelimit import RateLimitedRequest
from helpscout_export.results import ResultSet
from helpscout_export.threads import ThreadFetcher

__all__ = [
    "ApiError",
    "Conversation",
    "DecodeError",
    "ExportError",
    "ExportSummary",
    "PageWalker",
    "RateLimitedRequest",
    "ResultSet",
    "Thread",
    "ThreadFetcher",
    "TransportError",
    "collect_conversations",
    "run_export",
]
