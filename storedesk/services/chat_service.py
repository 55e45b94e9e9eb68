"""
Chat Service for StoreDesk

Coordinates one chat exchange: resolves the conversation, stores the
customer message, asks the LLM service for a reply and stores the reply.
Also serves the full history of a conversation.
"""

from typing import Optional

from storedesk.core.database import Database
from storedesk.models.chat import ChatResponse, HistoryResponse, SENDER_USER, SENDER_AI
from storedesk.services.llm_service import LLMService
from storedesk.utils.errors import NotFoundError
from storedesk.utils.logger import setup_logger


logger = setup_logger("ChatService")


class ChatService:
    """
    Chat workflow on top of the database and the LLM service.

    Usage:
        service = ChatService(db, llm_service)
        response = await service.send_message("Do you ship to Canada?")
        await service.send_message("How long?", session_id=response.session_id)
    """

    def __init__(self, db: Database, llm_service: LLMService, history_limit: int = 10):
        self.db = db
        self.llm_service = llm_service
        self.history_limit = history_limit

    async def send_message(self, message: str, session_id: Optional[str] = None) -> ChatResponse:
        """
        Handle one customer message and return the assistant reply.

        Args:
            message: Validated customer message
            session_id: Existing conversation id; a new conversation is
                        created when omitted

        Returns:
            ChatResponse: Reply text and the conversation id

        Raises:
            NotFoundError: If session_id does not match a conversation
            DatabaseError: If persisting a turn fails
        """
        # Create new conversation or validate existing one
        if not session_id:
            conversation = self.db.create_conversation()
            conversation_id = conversation.id
            logger.info(f"Created new conversation: {conversation_id}")
        else:
            if not self.db.conversation_exists(session_id):
                raise NotFoundError("Session not found")
            conversation_id = session_id
            logger.info(f"Using existing conversation: {conversation_id}")

        self.db.create_message(conversation_id, SENDER_USER, message)
        logger.info(f"USER_INPUT [Session:{conversation_id}]: {message}")

        recent_messages = self.db.get_recent_messages(conversation_id, self.history_limit)
        reply = await self.llm_service.generate_response(recent_messages)

        self.db.create_message(conversation_id, SENDER_AI, reply)
        logger.info(f"AGENT_RESPONSE [Session:{conversation_id}]: {reply}")

        return ChatResponse(reply=reply, session_id=conversation_id)

    def get_history(self, session_id: str) -> HistoryResponse:
        """
        Return every message of a conversation, oldest first.

        Raises:
            NotFoundError: If the conversation does not exist
        """
        if not self.db.conversation_exists(session_id):
            raise NotFoundError("Session not found")

        messages = self.db.get_all_messages(session_id)
        logger.info(f"History fetched | Session: {session_id} | Messages: {len(messages)}")

        return HistoryResponse(
            session_id=session_id,
            messages=[msg.to_history_entry() for msg in messages]
        )
