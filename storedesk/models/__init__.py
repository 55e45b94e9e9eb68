"""
Data models for intents, chat turns and conversations.

Available models:
- IntentType: Enum of customer intents
- ResolvedTurn: Reply text + resolved intent of one turn
- Conversation / Message: Persisted chat records
- ChatResponse / HistoryResponse: API response shapes
"""

from storedesk.models.intent import IntentType, ResolvedTurn
from storedesk.models.chat import (
    Conversation,
    Message,
    ChatResponse,
    HistoryResponse,
    SENDER_USER,
    SENDER_AI
)

__all__ = [
    "IntentType",
    "ResolvedTurn",
    "Conversation",
    "Message",
    "ChatResponse",
    "HistoryResponse",
    "SENDER_USER",
    "SENDER_AI"
]
