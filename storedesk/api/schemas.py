"""Request bodies for the chat API.

Fields are typed loosely on purpose: type and format checks happen in
storedesk.utils.validators so clients get the same 400 messages for every
kind of bad input.
"""

from typing import Any, Optional

from pydantic import BaseModel


class ChatMessageRequest(BaseModel):
    # A null sessionId is an error, an absent one is not; see model_fields_set
    message: Any = None
    sessionId: Optional[Any] = None
