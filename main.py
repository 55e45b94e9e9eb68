"""
StoreDesk - Interactive Chat Entry Point

Terminal interface to the StoreDesk customer support backend. It drives
the same ChatService as the HTTP API, so conversations started here are
stored in the database and can be resumed later by session id.

Features:
- Mock mode (rule-based intent engine, no API key) or real Gemini mode
- Persistent conversations (SQLite)
- Resume an earlier conversation with --session_id
- Metrics report with /status

Usage:
    # Rule-based engine, new conversation
    python main.py --mock

    # Resume a stored conversation
    python main.py --mock --session_id 3f2a6c1e-...

    # Real model (requires GOOGLE_API_KEY in .env)
    python main.py

    # Type '/quit' (or 'quit', 'exit', 'bye') to terminate the session

Author: StoreDesk Team
"""

import argparse
import asyncio
import sys

from storedesk.core.database import get_database
from storedesk.core.observability import metrics_collector
from storedesk.services.chat_service import ChatService
from storedesk.services.llm_service import LLMService
from storedesk.utils.config import load_settings, check_env_vars
from storedesk.utils.errors import AppError
from storedesk.utils.logger import setup_logger
from storedesk.utils.validators import validate_chat_message, validate_session_id


logger = setup_logger("StoreDesk_CLI")

EXIT_WORDS = ["quit", "exit", "bye", "/quit"]


def print_banner(mock_mode: bool):
    """Displays the StoreDesk welcome banner in the terminal."""
    mode = "Mock Engine (rule-based)" if mock_mode else "Gemini Support Agent"
    print(f"""
======================================================
🛒  S T O R E D E S K   S U P P O R T  🛒
======================================================
     Mode: {mode}
======================================================
Commands:
  /help      - Show this help message
  /status    - Show intent metrics
  /history   - Show this conversation
  /quit      - Exit
======================================================
""")


def print_history(service: ChatService, session_id: str):
    """Print every stored message of the current conversation."""
    history = service.get_history(session_id)
    for entry in history.messages:
        who = "👤 You" if entry["sender"] == "user" else "🤖 StoreDesk"
        print(f"{who}: {entry['text']}")


def handle_command(command: str, service: ChatService, session_id: str) -> None:
    """Handle slash commands (except /quit, handled by the loop)."""
    command = command.lower()

    if command == "/help":
        print("Ask about shipping, delivery times, tracking, returns or support hours.")
    elif command == "/status":
        print("\n" + metrics_collector.get_report())
    elif command == "/history":
        if session_id:
            print_history(service, session_id)
        else:
            print("No messages yet.")
    else:
        print(f"❌ Unknown command: {command}")
        print("Type /help for available commands")


async def main_loop():
    """
    Parse arguments, wire the services and run the conversation loop.

    Flow:
        1. Parse CLI arguments (--mock, --session_id)
        2. Load and validate configuration
        3. Initialize database, LLM service and chat service
        4. Loop: read input → ChatService.send_message → print reply
    """
    parser = argparse.ArgumentParser(
        description="StoreDesk - Customer Support Chat",
        epilog="Example: python main.py --mock"
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the rule-based engine instead of the Gemini model"
    )
    parser.add_argument(
        "--session_id",
        type=str,
        default=None,
        help="Resume an existing conversation"
    )
    args = parser.parse_args()

    settings = load_settings()
    if args.mock:
        settings.use_mock_llm = True
        settings.mock_latency_min = settings.mock_latency_max = 0.0

    try:
        check_env_vars(settings)
        if args.session_id:
            validate_session_id(args.session_id)
    except (ValueError, AppError) as e:
        print(str(e))
        sys.exit(1)

    print_banner(settings.use_mock_llm)
    logger.info(f"CLI started | Config: {settings.summary()}")

    db = get_database(settings.database_path)
    service = ChatService(db, LLMService(settings), history_limit=settings.history_limit)
    session_id = args.session_id

    while True:
        try:
            user_input = input("\n👤 You > ").strip()

            # Skip empty inputs
            if not user_input:
                continue

            if user_input.lower() in EXIT_WORDS:
                print("\n👋 Goodbye!")
                break

            if user_input.startswith("/"):
                handle_command(user_input, service, session_id)
                continue

            validate_chat_message(user_input)
            response = await service.send_message(user_input, session_id)
            session_id = response.session_id

            print(f"🤖 StoreDesk: {response.reply}")

        except AppError as e:
            print(f"⚠️  {e.message}")
            logger.warning(f"Request rejected: {e.message}")

        except (KeyboardInterrupt, EOFError):
            print("\n⚠️  Interrupted by user.")
            break

    if session_id:
        print(f"💾 Session id: {session_id}")
        logger.info(f"Session ended | Session: {session_id}")
    db.close()


if __name__ == "__main__":
    asyncio.run(main_loop())
