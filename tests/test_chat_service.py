"""Tests for ChatService: conversation workflow in mock mode."""

import pytest

from storedesk.core.database import Database
from storedesk.core.responses import RESPONSE_TEMPLATES
from storedesk.models.intent import IntentType
from storedesk.services.chat_service import ChatService
from storedesk.utils.errors import NotFoundError


class TestSendMessage:
    @pytest.mark.anyio
    async def test_new_conversation(self, chat_service: ChatService, db: Database) -> None:
        response = await chat_service.send_message("Do you ship to Canada?")

        assert db.conversation_exists(response.session_id)
        assert response.reply in RESPONSE_TEMPLATES[IntentType.SHIPPING_LOCATION]

        messages = db.get_all_messages(response.session_id)
        assert [(m.sender, m.text) for m in messages] == [
            ("user", "Do you ship to Canada?"),
            ("ai", response.reply),
        ]

    @pytest.mark.anyio
    async def test_existing_conversation_keeps_context(self, chat_service: ChatService) -> None:
        first = await chat_service.send_message("where is my order")
        second = await chat_service.send_message("how long", session_id=first.session_id)

        assert second.session_id == first.session_id
        assert second.reply in RESPONSE_TEMPLATES[IntentType.DELIVERY_TIME]

    @pytest.mark.anyio
    async def test_unknown_session(self, chat_service: ChatService) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await chat_service.send_message("hello", session_id="2b1d3c4e-0000-4000-8000-000000000000")
        assert exc_info.value.message == "Session not found"

    @pytest.mark.anyio
    async def test_conversations_are_isolated(self, chat_service: ChatService) -> None:
        tracking = await chat_service.send_message("where is my order")
        other = await chat_service.send_message("hello")

        assert tracking.session_id != other.session_id

        in_tracking = await chat_service.send_message("few days?", session_id=tracking.session_id)
        in_other = await chat_service.send_message("few days?", session_id=other.session_id)
        assert in_tracking.reply in RESPONSE_TEMPLATES[IntentType.DELIVERY_TIME]
        assert in_other.reply in RESPONSE_TEMPLATES[IntentType.FALLBACK]


class TestHistory:
    @pytest.mark.anyio
    async def test_history_format(self, chat_service: ChatService) -> None:
        response = await chat_service.send_message("hello")
        history = chat_service.get_history(response.session_id)

        data = history.to_dict()
        assert data["sessionId"] == response.session_id
        assert [m["sender"] for m in data["messages"]] == ["user", "ai"]
        for entry in data["messages"]:
            assert set(entry) == {"id", "sender", "text", "timestamp"}
            assert isinstance(entry["timestamp"], int)

    def test_unknown_session(self, chat_service: ChatService) -> None:
        with pytest.raises(NotFoundError):
            chat_service.get_history("2b1d3c4e-0000-4000-8000-000000000000")
