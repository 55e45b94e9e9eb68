"""
Conversation and Message Models

Plain data records exchanged between the persistence layer, the chat
service and the HTTP API. The API response shapes keep the camelCase
keys (sessionId) that the existing frontend expects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any


SENDER_USER = "user"
SENDER_AI = "ai"


@dataclass
class Conversation:
    """A chat session. Its id doubles as the public sessionId."""
    id: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "created_at": self.created_at.isoformat()}


@dataclass
class Message:
    """
    One turn of a conversation.

    Attributes:
        id: Unique message identifier (UUID string)
        conversation_id: Owning conversation
        sender: "user" or "ai"
        text: Message body
        created_at: When the turn was stored
    """
    id: str
    conversation_id: str
    sender: str
    text: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "conversation_id": self.conversation_id,
            "sender": self.sender,
            "text": self.text,
            "created_at": self.created_at.isoformat()
        }

    def to_history_entry(self) -> Dict[str, Any]:
        """Format for the history endpoint (timestamp in epoch milliseconds)"""
        return {
            "id": self.id,
            "sender": self.sender,
            "text": self.text,
            "timestamp": int(self.created_at.timestamp() * 1000)
        }


@dataclass
class ChatResponse:
    reply: str
    session_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"reply": self.reply, "sessionId": self.session_id}


@dataclass
class HistoryResponse:
    session_id: str
    messages: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"messages": self.messages, "sessionId": self.session_id}
