"""
StoreDesk HTTP server entry point.

Usage:
    python -m storedesk.server
    MOCK_MODE=true PORT=8080 python -m storedesk.server
"""

import sys

import uvicorn

from storedesk.api.app import create_app
from storedesk.core.database import get_database
from storedesk.utils.config import load_settings, check_env_vars
from storedesk.utils.logger import setup_logger


logger = setup_logger("Server")


def main():
    """Validate config, check the database, then serve the API."""
    try:
        settings = load_settings()
        check_env_vars(settings)
    except ValueError as e:
        print(str(e))
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    db = get_database(settings.database_path)
    if not db.ping():
        logger.error("Failed to start server: database unavailable")
        sys.exit(1)
    logger.info("Database connection successful")

    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Health check: http://localhost:{settings.port}/health")

    # uvicorn handles SIGINT/SIGTERM; the app lifespan closes the database
    uvicorn.run(create_app(settings=settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
