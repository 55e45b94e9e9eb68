"""
StoreDesk Services Package

- LLMService: Reply generation (mock engine or Gemini agent)
- ChatService: Conversation workflow (persist, generate, persist)
"""

from storedesk.services.llm_service import LLMService
from storedesk.services.chat_service import ChatService

__all__ = [
    'LLMService',
    'ChatService',
]
