"""ADHD Planner FastAPI backend."""
