"""
Intent Models for StoreDesk

This module defines the closed set of intents the mock engine can assign
to a customer message, plus the result record of a resolved chat turn.

The intent value strings are stable identifiers: they appear in logs and
metrics, so renaming a member is a breaking change for dashboards.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any


class IntentType(Enum):
    """Classification of a customer message by the intent classifier"""
    GREETING = "greeting"
    SHIPPING_LOCATION = "shipping_location"            # "Do you ship to X?"
    SHIPPING_POLICY = "shipping_policy"                # General shipping questions
    SHIPPING_CLARIFICATION = "shipping_clarification"  # Ambiguous "shipping?"
    DELIVERY_TIME = "delivery_time"                    # "How long?"
    TRACKING_STATUS = "tracking_status"                # "Where is my order?"
    RETURNS_POLICY = "returns_policy"
    PROCESS_INQUIRY = "process_inquiry"
    SUPPORT_CONTACT = "support_contact"
    ORDER_CANCELLATION = "order_cancellation"
    OUT_OF_SCOPE = "out_of_scope"                      # Pricing, discounts, competitors
    FALLBACK = "fallback"                              # Nothing matched


@dataclass(frozen=True)
class ResolvedTurn:
    """
    Outcome of one chat turn handled by the response selector.

    Attributes:
        reply_text: Template text sent back to the customer
        intent: Intent the turn was resolved to (after carry-over)
        carry_over_applied: True when a short follow-up inherited the
            previous intent instead of staying on fallback
    """
    reply_text: str
    intent: IntentType
    carry_over_applied: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging (intent as its string value)"""
        data = asdict(self)
        data["intent"] = self.intent.value
        return data
