"""
Core engine and infrastructure.

Engine:
- classify: Rule-based intent classifier
- ResponseSelector: Reply selection with contextual carry-over
- SessionIntentStore: Per-session last intent
- RESPONSE_TEMPLATES / STORE_KNOWLEDGE: Reply templates and store facts

Infrastructure:
- Database: SQLite manager for conversations and messages
- TurnTrace / MetricsCollector: Tracing and metrics
- logger: Structured logging (structlog)
"""

from storedesk.core.intent_classifier import (
    classify,
    match_rule,
    normalize,
    IntentRule,
    INTENT_RULES
)
from storedesk.core.response_engine import ResponseSelector
from storedesk.core.session_store import SessionIntentStore
from storedesk.core.responses import (
    RESPONSE_TEMPLATES,
    STORE_KNOWLEDGE,
    EMPTY_MESSAGE_REPLY
)
from storedesk.core.database import Database, get_database
from storedesk.core.observability import (
    TurnTrace,
    MetricsCollector,
    metrics_collector,
    logger
)

__all__ = [
    # Engine
    "classify",
    "match_rule",
    "normalize",
    "IntentRule",
    "INTENT_RULES",
    "ResponseSelector",
    "SessionIntentStore",
    "RESPONSE_TEMPLATES",
    "STORE_KNOWLEDGE",
    "EMPTY_MESSAGE_REPLY",
    # Database
    "Database",
    "get_database",
    # Observability
    "TurnTrace",
    "MetricsCollector",
    "metrics_collector",
    "logger"
]
