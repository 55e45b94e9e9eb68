"""
Request validation for the chat API.

Checks run before a message reaches the chat service, so the engine only
ever sees non-empty strings of bounded length and well-formed session ids.
"""

import re
from typing import Any

from storedesk.utils.errors import ValidationError


MAX_MESSAGE_LENGTH = 1000

# Marks a request body without a sessionId key (as opposed to an explicit null)
NOT_PROVIDED = object()

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE
)


def validate_chat_message(message: Any, session_id: Any = NOT_PROVIDED) -> None:
    """
    Validate the body of a chat message request.

    Args:
        message: Customer message as received
        session_id: Session id as received; leave as NOT_PROVIDED when the
                    body has none. An explicit None is rejected.

    Raises:
        ValidationError: On a missing, blank, oversized or non-string
            message, or a malformed session id
    """
    if not message or not isinstance(message, str):
        raise ValidationError("Message is required and must be a string")

    if not message.strip():
        raise ValidationError("Message cannot be empty")

    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValidationError(f"Message is too long (max {MAX_MESSAGE_LENGTH} characters)")

    if session_id is not NOT_PROVIDED:
        if not isinstance(session_id, str):
            raise ValidationError("SessionId must be a string")
        if not UUID_PATTERN.fullmatch(session_id):
            raise ValidationError("Invalid sessionId format")


def validate_session_id(session_id: Any) -> None:
    """Validate a session id taken from the URL path."""
    if not session_id:
        raise ValidationError("SessionId is required")

    if not isinstance(session_id, str) or not UUID_PATTERN.fullmatch(session_id):
        raise ValidationError("Invalid sessionId format")
