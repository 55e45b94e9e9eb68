"""
Session Intent Store

Keeps the most recently resolved intent of every chat session so that a
short follow-up ("how long?") can be interpreted in the context of the
previous turn.

The store lives in process memory: entries survive for the lifetime of the
process and are lost on restart. Deployments running several processes
must share this state through an external keyed store instead.
"""

import threading
from typing import Dict, Optional

from storedesk.models.intent import IntentType


class SessionIntentStore:
    """
    Thread-safe mapping of session id → last resolved IntentType.

    Concurrency contract:
        - Every get/set is atomic; a reader never sees a partial entry.
        - Concurrent turns of the same session race, and the last write wins.
        - The lock is held only for a dictionary access, so different
          sessions never wait on each other for longer than that.

    Usage:
        store = SessionIntentStore()
        store.set("session-1", IntentType.SHIPPING_POLICY)
        store.get("session-1")   # IntentType.SHIPPING_POLICY
        store.get("unknown")     # None
    """

    def __init__(self):
        self._intents: Dict[str, IntentType] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[IntentType]:
        """
        Look up the previous intent of a session.

        Args:
            session_id: Opaque session identifier

        Returns:
            IntentType or None: None when the session has no recorded intent
        """
        with self._lock:
            return self._intents.get(session_id)

    def set(self, session_id: str, intent: IntentType) -> None:
        """
        Record the resolved intent of a session, replacing any earlier value.

        Raises:
            TypeError: If intent is not an IntentType member
        """
        if not isinstance(intent, IntentType):
            raise TypeError(f"intent must be an IntentType, got {type(intent).__name__}")
        with self._lock:
            self._intents[session_id] = intent

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._intents

    def __len__(self) -> int:
        with self._lock:
            return len(self._intents)
