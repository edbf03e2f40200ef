"""Database connection and models."""
from .connection import DatabaseManager, db
from .base_model import BaseModel

__all__ = [
    "DatabaseManager",
    "db",
    "BaseModel",
]
