"""
Agent Layer for ADHD Planner

Agents take an intent and a context dict and return an AgentResponse.

- BaseAgent: Abstract base class defining the agent interface
- AgentResponse: Standard response structure for agent outputs
- ReviewAgent: Weekly/daily reviews, trends, recommendations and insights

Usage:
    from adhd_planner.agents import ReviewAgent
    from adhd_planner.core import create_store

    store = create_store()
    agent = ReviewAgent(store)
    response = agent.process("weekly_review", {"date": "2024-03-13"})
"""

from .base_agent import BaseAgent, AgentResponse
from .review_agent import ReviewAgent

__all__ = [
    'BaseAgent',
    'AgentResponse',
    'ReviewAgent',
]
