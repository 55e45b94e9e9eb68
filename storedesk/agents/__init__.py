"""
StoreDesk Agents Package

Contains the LLM agent used in real mode:
- Store Support Agent: Answers store questions from the store knowledge
"""

from storedesk.agents.support_agent import get_support_agent

__all__ = [
    'get_support_agent',
]
