"""
Response Templates and Store Knowledge

STORE_KNOWLEDGE holds the store facts (shipping times, return window,
support hours). Every template and the real-model instruction are built
from it, so a policy change is made here once.

Each intent maps to a fixed, non-empty tuple of reply templates. The
response selector picks one of them at random for variety.
"""

from typing import Dict, Tuple

from storedesk.models.intent import IntentType


STORE_KNOWLEDGE = {
    "delivery_window": "5–7 business days",
    "shipping_coverage": "worldwide",
    "return_window_days": 7,
    "return_condition": "unused and in original packaging",
    "refund_window": "5–7 business days",
    "support_days": "Monday to Friday",
    "support_hours": "10:00 AM – 6:00 PM IST",
    "support_email": "support@example.com",
}

_DELIVERY = STORE_KNOWLEDGE["delivery_window"]
_RETURN_DAYS = STORE_KNOWLEDGE["return_window_days"]
_REFUND = STORE_KNOWLEDGE["refund_window"]
_SUPPORT_DAYS = STORE_KNOWLEDGE["support_days"]
_SUPPORT_HOURS = STORE_KNOWLEDGE["support_hours"]

EMPTY_MESSAGE_REPLY = "Please enter a message so I can help you."

RESPONSE_TEMPLATES: Dict[IntentType, Tuple[str, ...]] = {
    IntentType.GREETING: (
        "Hello! How can I help you today?",
        "Hi there! I'm here to help with shipping, returns, and order questions.",
        "Greetings! How may I assist you with your store inquiries?",
    ),
    IntentType.SHIPPING_CLARIFICATION: (
        "Are you asking about delivery time, tracking, or shipping locations?",
    ),
    IntentType.SHIPPING_LOCATION: (
        f"Yes, we ship to that location. Standard delivery takes {_DELIVERY}.",
        f"We certainly ship there. You can expect your order in {_DELIVERY} via our standard shipping.",
        f"Yes, our worldwide shipping covers your region. Delivery typically takes {_DELIVERY}.",
    ),
    IntentType.SHIPPING_POLICY: (
        "We ship worldwide using standard shipping. Do you need delivery times or tracking details?",
        f"Yes, we offer worldwide shipping. Standard delivery is {_DELIVERY}.",
        f"Our shipping services cover most global destinations with delivery in {_DELIVERY}.",
    ),
    IntentType.DELIVERY_TIME: (
        f"Standard delivery typically takes {_DELIVERY}.",
        f"You can expect your order to arrive within {_DELIVERY}.",
        f"Orders are usually delivered in {_DELIVERY}.",
    ),
    IntentType.TRACKING_STATUS: (
        "Once your order ships, we email tracking details so you can check its status.",
        "You will receive an automated email with tracking details as soon as your package leaves our warehouse.",
        "Tracking information is sent via email immediately upon shipment.",
    ),
    IntentType.RETURNS_POLICY: (
        f"We have a {_RETURN_DAYS}-day return policy for unused items in their original packaging. "
        f"Refunds are processed within {_REFUND} after we receive the return.",
        f"You can return items within {_RETURN_DAYS} days if they are unused and in original packaging. "
        f"We process refunds within {_REFUND} of receiving them.",
        f"Our policy allows returns within {_RETURN_DAYS} days of delivery for unused items in original packaging.",
    ),
    IntentType.PROCESS_INQUIRY: (
        "To place a return, simply contact support. For shipping, we handle everything automatically once you order.",
        f"The process is simple: orders arrive in {_DELIVERY}, and returns are accepted "
        f"within {_RETURN_DAYS} days of delivery.",
    ),
    IntentType.SUPPORT_CONTACT: (
        f"Our support team is online {_SUPPORT_DAYS}, {_SUPPORT_HOURS}. "
        "You can reach us via email during those hours.",
        f"You can contact human support {_SUPPORT_DAYS}, {_SUPPORT_HOURS}.",
    ),
    IntentType.ORDER_CANCELLATION: (
        "You can cancel your order before it has been shipped. Please contact our support team "
        "with your order ID to request cancellation.",
    ),
    IntentType.OUT_OF_SCOPE: (
        "I apologize, but I can only assist with questions regarding shipping, returns, and store policies.",
        "I don't have information about discounts. I can only help with store policies.",
        "My expertise is limited to shipping, returns, and general support inquiries.",
    ),
    IntentType.FALLBACK: (
        "I can help with shipping, returns, or support hours. Could you tell me a bit more?",
        "I'm not sure I understood. Are you asking about an order or our policies?",
    ),
}


def templates_for(intent: IntentType) -> Tuple[str, ...]:
    """Return the reply templates registered for an intent."""
    return RESPONSE_TEMPLATES[intent]
