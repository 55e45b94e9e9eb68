"""
StoreDesk Data Layer Initialization Script

This script initializes the conversation database used by StoreDesk:
- Creates the SQLite file and its schema (conversations, messages)
- Optionally wipes stored conversations (--reset)

Usage:
    python setup_data.py
    python setup_data.py --reset

Author: StoreDesk Team
"""

import argparse
import sys

from storedesk.core.database import Database
from storedesk.utils.config import load_settings
from storedesk.utils.logger import setup_logger


logger = setup_logger("Setup")


def init_database(db_path: str, reset: bool = False) -> None:
    """
    Creates the conversation database and its tables.

    Schema:
        conversations: id (UUID text), created_at
        messages: id, conversation_id, sender ('user'|'ai'), text, created_at

    Args:
        db_path: SQLite file to create or open
        reset: Delete all stored conversations and messages
    """
    db = Database(db_path)
    try:
        if reset:
            db.reset()
            print(f"🗑️  [OK] Cleared conversations: {db_path}")
        print(f"✅ [OK] Conversation database ready: {db_path}")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the StoreDesk database")
    parser.add_argument("--reset", action="store_true", help="Delete stored conversations")
    args = parser.parse_args()

    settings = load_settings()

    print("=" * 60)
    print("🛒  StoreDesk Data Layer Initialization")
    print("=" * 60)

    try:
        logger.info("Running database initialization...")
        init_database(settings.database_path, reset=args.reset)
        logger.info("Database initialized successfully")
    except Exception as e:
        print(f"❌ Failed to initialize database: {e}")
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)

    print("=" * 60)
    print("✅ Setup Complete - Ready to launch StoreDesk!")
