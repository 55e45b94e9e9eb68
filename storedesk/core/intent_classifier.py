"""
Intent Classifier for StoreDesk

Deterministic keyword classifier used by the mock engine in place of a
real language model. A customer message is normalized once and then run
through an ordered table of rules; the first rule that matches decides the
intent and nothing below it is evaluated.

Rule order is part of the contract. Out-of-scope chatter is checked before
greetings, explicit tracking before generic shipping, and so on. Moving a
rule changes how ambiguous messages are classified.

Usage:
    from storedesk.core.intent_classifier import classify

    classify("where is my shipment")               # IntentType.TRACKING_STATUS
    classify("how long", IntentType.SHIPPING_POLICY)  # IntentType.DELIVERY_TIME
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple

from storedesk.models.intent import IntentType


# Everything that is not a letter, digit or whitespace (underscore included)
_STRIP_PATTERN = re.compile(r"[^\w\s]|_")


@dataclass(frozen=True)
class NormalizedText:
    """
    A customer message prepared for rule matching.

    Attributes:
        text: Lower-cased tokens joined by single spaces
        tokens: Whitespace-separated words after punctuation removal
    """
    text: str
    tokens: Tuple[str, ...]

    @property
    def token_count(self) -> int:
        return len(self.tokens)


def normalize(utterance: str) -> NormalizedText:
    """
    Lower-case the message, drop punctuation and split it into tokens.

    Args:
        utterance: Raw customer message (may be empty)

    Returns:
        NormalizedText: Cleaned text and its tokens

    Example:
        >>> normalize("Shipping?!").tokens
        ('shipping',)
    """
    cleaned = _STRIP_PATTERN.sub("", utterance.lower())
    tokens = tuple(cleaned.split())
    return NormalizedText(text=" ".join(tokens), tokens=tokens)


def _words(*terms: str) -> Pattern:
    """Whole-word pattern for any of the given words or phrases."""
    return re.compile(r"\b(?:" + "|".join(terms) + r")\b")


def _followed_by(leads: Tuple[str, ...], follows: Tuple[str, ...]) -> Pattern:
    """Whole-word pattern: one of `leads`, later in the text one of `follows`."""
    return re.compile(
        r"\b(?:" + "|".join(leads) + r")\b.*\b(?:" + "|".join(follows) + r")\b"
    )


# --- Vocabulary ---
OUT_OF_SCOPE_WORDS = _words(
    "discount", "coupon", "promo", "code", "price",
    "cost", "competitor", "cheap", "deal", "sale"
)
# "hi+" and "hey+" accept stretched greetings such as "hiii" or "heyyy"
GREETING_WORDS = _words(
    "hi+", "hello", "hey+", "hlo", "greetings", "namaste",
    "good morning", "good afternoon", "good evening"
)
TRACK_WORDS = _words("track", "tracking number")
WHERE_THEN_OBJECT = _followed_by(
    ("where",), ("order", "package", "shipping", "shipment", "item", "stuff")
)
STATUS_THEN_OBJECT = _followed_by(("status",), ("order", "shipping", "shipment"))
SHORT_SHIPPING_WORDS = _words("shipping", "delivery", "ship", "deliver")
CANCEL_PHRASES = _words(
    "cancel", "cancel order", "cancel my order", "cancel product",
    "cancel my product", "stop my order", "i want to cancel"
)
TIME_QUESTION_THEN_ARRIVAL = _followed_by(
    ("how long", "when"), ("arrive", "get", "take", "deliver", "receive", "reach")
)
DELIVERY_TIME_NAMES = _words("delivery time", "shipping time", "duration")
GEOGRAPHY_CUES = _words(
    "international", "worldwide", "globally", "overseas",
    "outside country", "ship to", "deliver to", "send to"
)
SEND_THEN_PLACE = _followed_by(("ship", "deliver", "send"), ("to", "in", "at"))
SHIPPING_WORDS = _words("shipping", "delivery")
TIME_WORDS = _words("time", "long")
TRACKING_HINTS = _words("track", "where", "status")
RETURN_WORDS = _words("return", "refund", "exchange", "back")
PROCESS_WORDS = _words("process", "how to", "steps", "procedure", "do i need to")
SUPPORT_WORDS = _words("support", "contact", "email", "phone", "help", "human", "agent")
FOLLOW_UP_TIME_WORDS = _words("long", "time", "days", "when", "arrive")
FOLLOW_UP_TRACKING_WORDS = _words("where", "status", "it")

SHIPPING_CONTEXT_INTENTS = frozenset({
    IntentType.SHIPPING_LOCATION,
    IntentType.SHIPPING_POLICY,
    IntentType.TRACKING_STATUS,
})


Predicate = Callable[[NormalizedText, Optional[IntentType]], bool]


@dataclass(frozen=True)
class IntentRule:
    """
    One entry of the rule table: a named predicate and the intent it yields.

    Rules are kept as data so each can be inspected and exercised on its own.
    """
    name: str
    intent: IntentType
    predicate: Predicate

    def matches(self, normalized: NormalizedText,
                previous_intent: Optional[IntentType] = None) -> bool:
        return self.predicate(normalized, previous_intent)


def _has(pattern: Pattern) -> Predicate:
    return lambda n, previous: pattern.search(n.text) is not None


def _has_all(*patterns: Pattern) -> Predicate:
    return lambda n, previous: all(p.search(n.text) for p in patterns)


def _short_shipping_mention(n: NormalizedText, previous: Optional[IntentType]) -> bool:
    # Only on the first turn of a topic; with context the message falls through
    return (
        previous is None
        and n.token_count <= 2
        and SHORT_SHIPPING_WORDS.search(n.text) is not None
    )


def _shipping_follow_up(n: NormalizedText, previous: Optional[IntentType]) -> bool:
    return previous in SHIPPING_CONTEXT_INTENTS and FOLLOW_UP_TIME_WORDS.search(n.text) is not None


def _tracking_follow_up(n: NormalizedText, previous: Optional[IntentType]) -> bool:
    return previous is IntentType.TRACKING_STATUS and FOLLOW_UP_TRACKING_WORDS.search(n.text) is not None


# Evaluated top to bottom, first match wins. Order is significant.
INTENT_RULES: List[IntentRule] = [
    IntentRule("out_of_scope", IntentType.OUT_OF_SCOPE, _has(OUT_OF_SCOPE_WORDS)),
    IntentRule("greeting", IntentType.GREETING, _has(GREETING_WORDS)),
    IntentRule("tracking_explicit", IntentType.TRACKING_STATUS, _has(TRACK_WORDS)),
    IntentRule("tracking_where", IntentType.TRACKING_STATUS, _has(WHERE_THEN_OBJECT)),
    IntentRule("tracking_status_word", IntentType.TRACKING_STATUS, _has(STATUS_THEN_OBJECT)),
    IntentRule("shipping_clarification", IntentType.SHIPPING_CLARIFICATION, _short_shipping_mention),
    IntentRule("order_cancellation", IntentType.ORDER_CANCELLATION, _has(CANCEL_PHRASES)),
    IntentRule("delivery_time_question", IntentType.DELIVERY_TIME,
               _has(TIME_QUESTION_THEN_ARRIVAL)),
    IntentRule("delivery_time_named", IntentType.DELIVERY_TIME, _has(DELIVERY_TIME_NAMES)),
    IntentRule("shipping_location_cue", IntentType.SHIPPING_LOCATION, _has(GEOGRAPHY_CUES)),
    IntentRule("shipping_location_phrase", IntentType.SHIPPING_LOCATION, _has(SEND_THEN_PLACE)),
    IntentRule("shipping_generic_time", IntentType.DELIVERY_TIME, _has_all(SHIPPING_WORDS, TIME_WORDS)),
    IntentRule("shipping_generic_tracking", IntentType.TRACKING_STATUS,
               _has_all(SHIPPING_WORDS, TRACKING_HINTS)),
    IntentRule("shipping_policy", IntentType.SHIPPING_POLICY, _has(SHIPPING_WORDS)),
    IntentRule("returns_policy", IntentType.RETURNS_POLICY, _has(RETURN_WORDS)),
    IntentRule("process_inquiry", IntentType.PROCESS_INQUIRY, _has(PROCESS_WORDS)),
    IntentRule("support_contact", IntentType.SUPPORT_CONTACT, _has(SUPPORT_WORDS)),
    IntentRule("context_delivery_time", IntentType.DELIVERY_TIME, _shipping_follow_up),
    IntentRule("context_tracking", IntentType.TRACKING_STATUS, _tracking_follow_up),
]


def match_rule(utterance: str,
               previous_intent: Optional[IntentType] = None) -> Optional[IntentRule]:
    """
    Return the first rule matching the message, or None when nothing matches.

    Args:
        utterance: Raw customer message
        previous_intent: Intent resolved for the previous turn of the session

    Returns:
        IntentRule or None: The winning rule
    """
    normalized = normalize(utterance)
    for rule in INTENT_RULES:
        if rule.matches(normalized, previous_intent):
            return rule
    return None


def classify(utterance: str, previous_intent: Optional[IntentType] = None) -> IntentType:
    """
    Assign exactly one intent to a customer message.

    Total and side-effect free: any string, including an empty one, yields
    a member of IntentType. Messages no rule recognises yield FALLBACK.

    Args:
        utterance: Raw customer message
        previous_intent: Intent resolved for the previous turn, if any

    Returns:
        IntentType: The classified intent
    """
    rule = match_rule(utterance, previous_intent)
    if rule is None:
        return IntentType.FALLBACK
    return rule.intent
