"""Page storage."""

from .manager import DatabaseManager

__all__ = ["DatabaseManager"]
