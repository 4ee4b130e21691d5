"""
ADHD Planner
Task, mood and focus-session tracking with weekly analytics.
"""

__version__ = "1.0.0"
