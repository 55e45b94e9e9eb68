"""
Logging Utility for StoreDesk

This module configures a centralized logging system that writes to a log
file. It supports observability by capturing:
- Incoming HTTP requests
- Chat turns (user input and replies)
- Calls to the real language model
- Persistence and system errors

The log file is stored in the 'logs/' directory (override with LOG_DIR)
and follows a structured format suitable for analysis and debugging.

Usage:
    from storedesk.utils.logger import setup_logger

    logger = setup_logger("ChatService")
    logger.info("Message processed")
    logger.error("An error occurred")
"""

import logging
import os


def setup_logger(name: str = "StoreDesk") -> logging.Logger:
    """
    Configures and returns a logger with a file handler.

    The logger writes to 'logs/storedesk.log' with timestamps,
    log levels, and module names for full traceability.

    Args:
        name (str): The logger name (typically the module name).
                    Defaults to "StoreDesk".

    Returns:
        logging.Logger: Configured logger instance ready for use.

    Features:
        - Automatic log directory creation
        - UTF-8 encoding for international character support
        - Prevents duplicate handlers on re-initialization
        - Structured format: timestamp - [level] - name - message

    Example:
        >>> logger = setup_logger("LLMService")
        >>> logger.info("Calling model")
        2026-01-15 10:30:45 - [INFO] - LLMService - Calling model
    """
    # 1. Ensure the log directory exists
    log_dir = os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)

    # 2. Get or create logger instance
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)

    # 3. Prevent duplicate handlers if logger already configured
    if logger.hasHandlers():
        return logger

    # 4. Define log message format (timestamp - level - name - message)
    formatter = logging.Formatter(
        fmt='%(asctime)s - [%(levelname)s] - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 5. Configure file handler (writes to logs/storedesk.log)
    log_file_path = os.path.join(log_dir, "storedesk.log")
    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.INFO)

    logger.addHandler(file_handler)

    return logger
