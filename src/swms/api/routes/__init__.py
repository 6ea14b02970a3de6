"""Route group exports."""

from . import ai, analytics, bins, blockchain, complaints, engagement, health, live, profile, routes, tasks, teams

__all__ = [
    "ai",
    "analytics",
    "bins",
    "blockchain",
    "complaints",
    "engagement",
    "health",
    "live",
    "profile",
    "routes",
    "tasks",
    "teams",
]
