"""
Database Layer for StoreDesk

Manages the SQLite database holding conversations and their messages.
Provides a clean interface for the chat service to persist turns and
read back conversation history.
"""

import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from storedesk.models.chat import Conversation, Message, SENDER_USER, SENDER_AI
from storedesk.utils.errors import DatabaseError
from storedesk.utils.logger import setup_logger


logger = setup_logger("Database")


SCHEMA = """
    CREATE TABLE IF NOT EXISTS conversations (
        id TEXT PRIMARY KEY,
        created_at TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS messages (
        id TEXT PRIMARY KEY,
        conversation_id TEXT NOT NULL REFERENCES conversations(id) ON DELETE CASCADE,
        sender TEXT NOT NULL CHECK (sender IN ('user', 'ai')),
        text TEXT NOT NULL,
        created_at TEXT NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_messages_conversation
    ON messages(conversation_id, created_at);
"""


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Database:
    """
    SQLite database manager for chat conversations.

    This class handles:
    - Database initialization and schema creation
    - Conversation creation and lookup
    - Message storage and history queries

    Usage:
        db = Database("data/storedesk.db")
        conversation = db.create_conversation()
        db.create_message(conversation.id, "user", "Do you ship to Canada?")
        history = db.get_recent_messages(conversation.id, limit=10)
    """

    def __init__(self, db_path: str = "data/storedesk.db"):
        """
        Initialize database connection and ensure schema exists.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

        # Ensure data directory exists
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row  # Enable dict-like access
        self.conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.Lock()
        self._init_schema()

    def _init_schema(self):
        """Create tables if they don't exist"""
        with self._lock:
            self.conn.executescript(SCHEMA)
            self.conn.commit()

    def reset(self):
        """Drop all conversations and messages"""
        with self._lock:
            self.conn.execute("DELETE FROM messages")
            self.conn.execute("DELETE FROM conversations")
            self.conn.commit()

    def ping(self) -> bool:
        """Check that the database answers a trivial query"""
        try:
            with self._lock:
                self.conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error as e:
            logger.error(f"Database ping failed: {e}")
            return False

    # --- Conversations ---

    def create_conversation(self) -> Conversation:
        """
        Create a new conversation.

        Returns:
            Conversation: The stored conversation with a fresh UUID

        Raises:
            DatabaseError: If the insert fails
        """
        conversation = Conversation(id=str(uuid4()), created_at=_now())
        try:
            with self._lock:
                self.conn.execute(
                    "INSERT INTO conversations (id, created_at) VALUES (?, ?)",
                    (conversation.id, conversation.created_at.isoformat())
                )
                self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error creating conversation: {e}")
            raise DatabaseError("Failed to create conversation") from e

        return conversation

    def find_conversation(self, conversation_id: str) -> Optional[Conversation]:
        """
        Retrieve a conversation by its ID.

        Returns:
            Conversation or None: The conversation if found
        """
        try:
            with self._lock:
                row = self.conn.execute(
                    "SELECT id, created_at FROM conversations WHERE id = ?",
                    (conversation_id,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Error finding conversation: {e}")
            raise DatabaseError("Failed to find conversation") from e

        if not row:
            return None

        return Conversation(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"])
        )

    def conversation_exists(self, conversation_id: str) -> bool:
        """Check whether a conversation with this ID exists"""
        try:
            with self._lock:
                row = self.conn.execute(
                    "SELECT 1 FROM conversations WHERE id = ?",
                    (conversation_id,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Error checking conversation existence: {e}")
            raise DatabaseError("Failed to check conversation") from e

        return row is not None

    # --- Messages ---

    def create_message(self, conversation_id: str, sender: str, text: str) -> Message:
        """
        Store one turn of a conversation.

        Args:
            conversation_id: Owning conversation
            sender: "user" or "ai"
            text: Message body

        Returns:
            Message: The stored message

        Raises:
            ValueError: If sender is not "user" or "ai"
            DatabaseError: If the insert fails (e.g., unknown conversation)
        """
        if sender not in (SENDER_USER, SENDER_AI):
            raise ValueError(f"Invalid sender: {sender}")

        message = Message(
            id=str(uuid4()),
            conversation_id=conversation_id,
            sender=sender,
            text=text,
            created_at=_now()
        )
        try:
            with self._lock:
                self.conn.execute("""
                    INSERT INTO messages (id, conversation_id, sender, text, created_at)
                    VALUES (?, ?, ?, ?, ?)
                """, (message.id, message.conversation_id, message.sender,
                      message.text, message.created_at.isoformat()))
                self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error creating message: {e}")
            raise DatabaseError("Failed to save message") from e

        return message

    def get_recent_messages(self, conversation_id: str, limit: int = 10) -> List[Message]:
        """
        Retrieve the latest messages of a conversation.

        Args:
            conversation_id: Conversation to read
            limit: Maximum number of messages

        Returns:
            List[Message]: Up to `limit` most recent messages, oldest first
        """
        try:
            with self._lock:
                rows = self.conn.execute("""
                    SELECT id, conversation_id, sender, text, created_at
                    FROM messages
                    WHERE conversation_id = ?
                    ORDER BY created_at DESC, rowid DESC
                    LIMIT ?
                """, (conversation_id, limit)).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error fetching recent messages: {e}")
            raise DatabaseError("Failed to fetch messages") from e

        # Reverse to get chronological order (oldest to newest)
        return [self._row_to_message(row) for row in reversed(rows)]

    def get_all_messages(self, conversation_id: str) -> List[Message]:
        """
        Retrieve every message of a conversation in chronological order.
        """
        try:
            with self._lock:
                rows = self.conn.execute("""
                    SELECT id, conversation_id, sender, text, created_at
                    FROM messages
                    WHERE conversation_id = ?
                    ORDER BY created_at ASC, rowid ASC
                """, (conversation_id,)).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error fetching all messages: {e}")
            raise DatabaseError("Failed to fetch messages") from e

        return [self._row_to_message(row) for row in rows]

    @staticmethod
    def _row_to_message(row: sqlite3.Row) -> Message:
        return Message(
            id=row["id"],
            conversation_id=row["conversation_id"],
            sender=row["sender"],
            text=row["text"],
            created_at=datetime.fromisoformat(row["created_at"])
        )

    def close(self):
        """Close database connection"""
        with self._lock:
            self.conn.close()


# Singleton instance
_db_instance = None


def get_database(db_path: Optional[str] = None) -> Database:
    """Get or create the global Database instance"""
    global _db_instance
    if _db_instance is None:
        _db_instance = Database(db_path) if db_path else Database()
    return _db_instance
