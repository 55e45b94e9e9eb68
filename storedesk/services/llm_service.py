"""
LLM Service for StoreDesk

Generates the assistant reply for the latest customer message.

Modes:
    - Mock: the rule-based ResponseSelector answers from fixed templates,
      after a short simulated latency. No API key needed.
    - Real: the Store Support Agent (Gemini via Google ADK) answers from a
      transcript of the recent conversation.

The real path never raises to the caller: rate limits and any other model
failure are turned into a customer-facing apology.
"""

import asyncio
import random
from typing import List, Optional
from uuid import uuid4

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from storedesk.agents.support_agent import get_support_agent
from storedesk.core.observability import metrics_collector
from storedesk.core.response_engine import ResponseSelector
from storedesk.core.responses import EMPTY_MESSAGE_REPLY, STORE_KNOWLEDGE
from storedesk.models.chat import Message, SENDER_USER
from storedesk.utils.config import Settings
from storedesk.utils.logger import setup_logger


logger = setup_logger("LLMService")

APP_NAME = "storedesk"

_SUPPORT = STORE_KNOWLEDGE
EMPTY_MODEL_REPLY = (
    "I apologize, I couldn't generate a response. Please contact our support "
    f"team directly at {_SUPPORT['support_email']}."
)
RATE_LIMIT_REPLY = "I’m currently handling a high volume of requests. Please try again shortly."
GENERIC_ERROR_REPLY = (
    "I apologize, but I'm having trouble processing your request at the moment. "
    f"Please try again or contact our support team directly at {_SUPPORT['support_email']} "
    f"({_SUPPORT['support_days']}, {_SUPPORT['support_hours']})."
)


def is_rate_limit_error(error: Exception) -> bool:
    """Detect HTTP 429 responses from the model API"""
    status = getattr(error, "code", None) or getattr(error, "status_code", None)
    return status == 429 or "429" in str(error)


def build_transcript(history: List[Message]) -> str:
    """Render history as 'Customer: ...' / 'Agent: ...' lines"""
    return "\n".join(
        f"{'Customer' if msg.sender == SENDER_USER else 'Agent'}: {msg.text}"
        for msg in history
    )


class LLMService:
    """
    Produces assistant replies in mock or real mode.

    Usage:
        service = LLMService(settings)
        reply = await service.generate_response(recent_messages)
    """

    def __init__(self, settings: Settings, selector: Optional[ResponseSelector] = None,
                 rng: Optional[random.Random] = None):
        self.settings = settings
        self.selector = selector if selector is not None else ResponseSelector()
        self.rng = rng if rng is not None else random.Random()
        self.runner: Optional[Runner] = None
        self.session_service: Optional[InMemorySessionService] = None

        # Only initialize Gemini if in real mode and key is present
        if not settings.use_mock_llm and settings.google_api_key:
            self.session_service = InMemorySessionService()
            self.runner = Runner(
                agent=get_support_agent(settings.model_name),
                app_name=APP_NAME,
                session_service=self.session_service
            )
            logger.info(f"LLMService initialized in REAL mode (model: {settings.model_name})")
        elif not settings.use_mock_llm:
            logger.warning("LLM mode is set to real but no GOOGLE_API_KEY provided. Service may fail.")
        else:
            logger.info("LLMService initialized in MOCK mode")

    async def generate_response(self, history: List[Message]) -> str:
        """
        Generate the reply to the last message of a conversation.

        Args:
            history: Recent messages, oldest first; the last one is the
                     customer message to answer

        Returns:
            str: Reply text for the customer
        """
        if self.settings.use_mock_llm:
            return await self._generate_mock_response(history)
        return await self._generate_model_response(history)

    async def _generate_mock_response(self, history: List[Message]) -> str:
        last_message = history[-1] if history else None
        user_text = last_message.text if last_message else ""

        # Blank input validation (strict check)
        if not user_text.strip():
            return EMPTY_MESSAGE_REPLY

        logger.info(f"Generating mock response | Session: {last_message.conversation_id}")

        # Simulated network latency
        delay = self.rng.uniform(self.settings.mock_latency_min, self.settings.mock_latency_max)
        if delay > 0:
            await asyncio.sleep(delay)

        turn = self.selector.resolve_turn(last_message.conversation_id, user_text)
        logger.info(
            f"Mock reply | Session: {last_message.conversation_id} | "
            f"Intent: {turn.intent.value} | Carry-over: {turn.carry_over_applied}"
        )
        return turn.reply_text

    async def _generate_model_response(self, history: List[Message]) -> str:
        try:
            if self.runner is None:
                raise RuntimeError("LLM Service not initialized correctly for real mode")

            prompt = (
                "CONVERSATION HISTORY:\n"
                f"{build_transcript(history)}\n\n"
                "Please provide a helpful response to the customer's latest message. "
                "Remember to be concise, professional, and only use information "
                "from the knowledge base."
            )

            logger.info(
                f"Calling model | Messages: {len(history)} | Model: {self.settings.model_name}"
            )
            text = await self._call_model(prompt)
            logger.info(f"Model response received | Length: {len(text or '')}")

            return text or EMPTY_MODEL_REPLY

        except Exception as e:
            logger.error(f"Model API error: {e}")

            if is_rate_limit_error(e):
                metrics_collector.record_model_error("rate_limit")
                logger.warning("Model API rate limit hit. Returning fallback message.")
                return RATE_LIMIT_REPLY

            metrics_collector.record_model_error(type(e).__name__)
            return GENERIC_ERROR_REPLY

    async def _call_model(self, prompt: str) -> str:
        """
        Run the support agent on a single prompt and collect its final text.

        Each call uses a throwaway ADK session: the transcript in the prompt
        already carries the conversation context.
        """
        session = await self.session_service.create_session(
            app_name=APP_NAME,
            user_id="storedesk",
            session_id=str(uuid4())
        )
        content = types.Content(role="user", parts=[types.Part(text=prompt)])

        reply_parts = []
        try:
            async for event in self.runner.run_async(
                user_id="storedesk",
                session_id=session.id,
                new_message=content
            ):
                if event.is_final_response() and event.content and event.content.parts:
                    reply_parts.extend(part.text for part in event.content.parts if part.text)
        finally:
            await self.session_service.delete_session(
                app_name=APP_NAME,
                user_id="storedesk",
                session_id=session.id
            )

        return "".join(reply_parts).strip()
