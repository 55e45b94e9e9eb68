"""
Configuration Module for StoreDesk

This module handles environment variable loading and validation.
It ensures the model API key is present before the real model is used.

Usage:
    from storedesk.utils.config import load_settings, check_env_vars
    settings = load_settings()
    check_env_vars(settings)  # Raises ValueError if the API key is missing

Environment Variables:
    - MOCK_MODE: "true" to answer with the rule-based engine (no API key needed)
    - GOOGLE_API_KEY (or GEMINI_API_KEY): API key for Gemini models
    - DATABASE_PATH: SQLite file for conversations (default: data/storedesk.db)
    - PORT, APP_ENV, CORS_ORIGIN, MODEL_NAME, HISTORY_LIMIT
    - MOCK_LATENCY_MIN / MOCK_LATENCY_MAX: simulated delay in seconds
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file in the project root
load_dotenv()


DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000"


@dataclass
class Settings:
    """
    Runtime configuration, resolved once from the environment.

    Attributes:
        port: HTTP port for the API server
        app_env: Deployment environment name
        database_path: SQLite database file
        google_api_key: Gemini API key ("" when absent)
        use_mock_llm: Answer with the rule-based engine instead of Gemini
        cors_origins: Origins allowed by the CORS middleware
        model_name: Gemini model used in real mode
        mock_latency_min / mock_latency_max: Simulated delay range (seconds)
        history_limit: Number of recent messages sent to the model
    """
    port: int = 3000
    app_env: str = "development"
    database_path: str = "data/storedesk.db"
    google_api_key: str = ""
    use_mock_llm: bool = False
    cors_origins: List[str] = field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))
    model_name: str = "gemini-2.5-flash"
    mock_latency_min: float = 0.5
    mock_latency_max: float = 1.0
    history_limit: int = 10

    def summary(self) -> dict:
        """Startup visibility info (never includes the key itself)"""
        return {
            "mock_mode": self.use_mock_llm,
            "api_key_present": bool(self.google_api_key),
            "model": self.model_name,
            "database_path": self.database_path,
            "app_env": self.app_env,
        }


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Returns:
        Settings: Resolved configuration

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    cors = os.getenv("CORS_ORIGIN", DEFAULT_CORS_ORIGINS)
    return Settings(
        port=int(os.getenv("PORT", "3000")),
        app_env=os.getenv("APP_ENV", "development"),
        database_path=os.getenv("DATABASE_PATH", "data/storedesk.db"),
        google_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY") or "",
        use_mock_llm=os.getenv("MOCK_MODE", "").strip().lower() == "true",
        cors_origins=[origin.strip() for origin in cors.split(",") if origin.strip()],
        model_name=os.getenv("MODEL_NAME", "gemini-2.5-flash"),
        mock_latency_min=float(os.getenv("MOCK_LATENCY_MIN", "0.5")),
        mock_latency_max=float(os.getenv("MOCK_LATENCY_MAX", "1.0")),
        history_limit=int(os.getenv("HISTORY_LIMIT", "10")),
    )


def check_env_vars(settings: Settings) -> bool:
    """
    Validates that all required environment variables are set.

    In mock mode nothing is required. In real mode the Gemini API key is
    mandatory, since every reply is generated by the model.

    Returns:
        bool: True if all required variables are present.

    Raises:
        ValueError: If the API key is missing in real mode.

    Example:
        >>> check_env_vars(Settings(use_mock_llm=True))
        True
    """
    if not settings.use_mock_llm and not settings.google_api_key:
        raise ValueError(
            "❌ GOOGLE_API_KEY not found in environment variables.\n"
            "   Set MOCK_MODE=true to run without a model, or add to .env:\n"
            "   GOOGLE_API_KEY=your_api_key_here\n"
            "   Get your API key at: https://aistudio.google.com/apikey"
        )

    if settings.mock_latency_min > settings.mock_latency_max:
        raise ValueError("MOCK_LATENCY_MIN must not exceed MOCK_LATENCY_MAX")

    return True
