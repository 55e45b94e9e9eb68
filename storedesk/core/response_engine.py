"""
Response Selector for StoreDesk

Turns a customer message into a templated reply. This is the engine behind
mock mode: it classifies the message with the previous intent of the
session as context, lets very short follow-ups inherit that previous
intent, picks a reply template and remembers the resolved intent for the
next turn.

Flow:
    message → classify(message, previous) → carry-over check
            → random template for resolved intent → store resolved intent
"""

import random
import re
from typing import Optional

from storedesk.core.intent_classifier import classify
from storedesk.core.observability import TurnTrace, metrics_collector, logger
from storedesk.core.responses import EMPTY_MESSAGE_REPLY, templates_for
from storedesk.core.session_store import SessionIntentStore
from storedesk.models.intent import IntentType, ResolvedTurn


# Messages shorter than this may inherit the previous intent
CARRY_OVER_MAX_LENGTH = 20

# Commerce-adjacent words that mark a short message as a continuation
SOFT_KEYWORDS = re.compile(
    r"\b(?:shipping|delivery|order|cancel|product|item|return|refund|track|status"
    r"|it|that|how|when|where|international|worldwide|globally|overseas)\b"
)


class ResponseSelector:
    """
    Resolves chat turns to (reply, intent) and tracks per-session intent.

    Both collaborators are injectable: pass a seeded random.Random to make
    template selection reproducible, or a shared SessionIntentStore to
    share context between selectors.

    Usage:
        selector = ResponseSelector(rng=random.Random(7))
        turn = selector.resolve_turn("session-1", "Do you ship to Canada?")
        turn.intent       # IntentType.SHIPPING_LOCATION
        turn.reply_text   # one of the shipping_location templates
    """

    def __init__(self, store: Optional[SessionIntentStore] = None,
                 rng: Optional[random.Random] = None):
        self.store = store if store is not None else SessionIntentStore()
        self.rng = rng if rng is not None else random.Random()

    def resolve_turn(self, session_id: str, utterance: str) -> ResolvedTurn:
        """
        Produce the reply for one customer message and update session context.

        Args:
            session_id: Conversation the message belongs to
            utterance: Raw customer message

        Returns:
            ResolvedTurn: Reply text, resolved intent and carry-over flag

        Notes:
            A blank message gets a fixed prompt-for-input reply and leaves
            the session's stored intent untouched.
        """
        if not utterance.strip():
            logger.info("empty_message_received", session_id=session_id)
            return ResolvedTurn(reply_text=EMPTY_MESSAGE_REPLY, intent=IntentType.FALLBACK)

        trace = TurnTrace.create(session_id=session_id)
        previous_intent = self.store.get(session_id)
        intent = classify(utterance, previous_intent)

        carry_over_applied = self._should_carry_over(utterance, previous_intent, intent)
        if carry_over_applied:
            trace.log_decision(
                "carry_over",
                "short follow-up without a recognised topic",
                {"previous_intent": previous_intent.value}
            )
            intent = previous_intent

        reply_text = self.rng.choice(templates_for(intent))
        self.store.set(session_id, intent)

        logger.info(
            "intent_resolved",
            session_id=session_id,
            intent=intent.value,
            previous_intent=previous_intent.value if previous_intent else None,
            carry_over_applied=carry_over_applied
        )
        trace.finalize(intent=intent, carry_over_applied=carry_over_applied)
        metrics_collector.record_turn(
            intent,
            response_time=trace.metrics["response_time_seconds"],
            carry_over_applied=carry_over_applied
        )

        return ResolvedTurn(
            reply_text=reply_text,
            intent=intent,
            carry_over_applied=carry_over_applied
        )

    @staticmethod
    def _should_carry_over(utterance: str, previous_intent: Optional[IntentType],
                           intent: IntentType) -> bool:
        # Scans the raw message, not the punctuation-stripped form
        return (
            len(utterance) < CARRY_OVER_MAX_LENGTH
            and previous_intent is not None
            and intent is IntentType.FALLBACK
            and SOFT_KEYWORDS.search(utterance.lower()) is not None
        )
