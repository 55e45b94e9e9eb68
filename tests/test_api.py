"""StoreDesk HTTP API tests (mock mode, temp database)."""

import pytest
from httpx import AsyncClient

from storedesk.core.responses import RESPONSE_TEMPLATES
from storedesk.models.intent import IntentType
from storedesk.utils.validators import UUID_PATTERN


UNKNOWN_SESSION = "2b1d3c4e-0000-4000-8000-000000000000"


# ──────────────────────────────────────────
# Health
# ──────────────────────────────────────────


class TestHealthEndpoint:
    @pytest.mark.anyio
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data

    @pytest.mark.anyio
    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}


# ──────────────────────────────────────────
# POST /chat/message
# ──────────────────────────────────────────


class TestSendMessage:
    @pytest.mark.anyio
    async def test_new_session(self, client: AsyncClient) -> None:
        response = await client.post("/chat/message", json={"message": "Can I get a refund?"})
        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"reply", "sessionId"}
        assert UUID_PATTERN.fullmatch(data["sessionId"])
        assert data["reply"] in RESPONSE_TEMPLATES[IntentType.RETURNS_POLICY]

    @pytest.mark.anyio
    async def test_follow_up_uses_session_context(self, client: AsyncClient) -> None:
        first = (await client.post("/chat/message", json={"message": "refund please"})).json()
        response = await client.post(
            "/chat/message",
            json={"message": "and it?", "sessionId": first["sessionId"]},
        )
        data = response.json()
        assert data["sessionId"] == first["sessionId"]
        assert data["reply"] in RESPONSE_TEMPLATES[IntentType.RETURNS_POLICY]

    @pytest.mark.anyio
    @pytest.mark.parametrize("body,error", [
        ({}, "Message is required and must be a string"),
        ({"message": 42}, "Message is required and must be a string"),
        ({"message": "   "}, "Message cannot be empty"),
        ({"message": "x" * 1001}, "Message is too long (max 1000 characters)"),
        ({"message": "hi", "sessionId": 7}, "SessionId must be a string"),
        ({"message": "hi", "sessionId": None}, "SessionId must be a string"),
        ({"message": "hi", "sessionId": "not-a-uuid"}, "Invalid sessionId format"),
    ])
    async def test_validation_errors(self, client: AsyncClient, body: dict, error: str) -> None:
        response = await client.post("/chat/message", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": error}

    @pytest.mark.anyio
    async def test_max_length_is_accepted(self, client: AsyncClient) -> None:
        response = await client.post("/chat/message", json={"message": "x" * 1000})
        assert response.status_code == 200

    @pytest.mark.anyio
    async def test_unknown_session(self, client: AsyncClient) -> None:
        response = await client.post(
            "/chat/message",
            json={"message": "hello", "sessionId": UNKNOWN_SESSION},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Session not found"}

    @pytest.mark.anyio
    async def test_malformed_json(self, client: AsyncClient) -> None:
        response = await client.post(
            "/chat/message",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


# ──────────────────────────────────────────
# GET /chat/history/{session_id}
# ──────────────────────────────────────────


class TestHistory:
    @pytest.mark.anyio
    async def test_history(self, client: AsyncClient) -> None:
        sent = (await client.post("/chat/message", json={"message": "hello"})).json()
        response = await client.get(f"/chat/history/{sent['sessionId']}")
        assert response.status_code == 200
        data = response.json()
        assert data["sessionId"] == sent["sessionId"]
        assert [m["text"] for m in data["messages"]] == ["hello", sent["reply"]]
        assert [m["sender"] for m in data["messages"]] == ["user", "ai"]

    @pytest.mark.anyio
    async def test_invalid_session_id(self, client: AsyncClient) -> None:
        response = await client.get("/chat/history/not-a-uuid")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid sessionId format"}

    @pytest.mark.anyio
    async def test_unknown_session(self, client: AsyncClient) -> None:
        response = await client.get(f"/chat/history/{UNKNOWN_SESSION}")
        assert response.status_code == 404
        assert response.json() == {"error": "Session not found"}
