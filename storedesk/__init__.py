"""
StoreDesk - Customer Support Chat Backend

A chat backend for e-commerce customer support that answers questions
about shipping, delivery, tracking, returns and support hours.

This project provides:
- A rule-based intent engine (mock mode) with per-session context
- A Gemini-backed support agent (real mode) via Google ADK
- Conversation persistence (SQLite)
- An HTTP API and an interactive CLI
- Observability (structured logging, traces, metrics)
"""

__version__ = "1.0.0"
