"""ScoutAI football scouting data model."""

__version__ = "1.0.0"
