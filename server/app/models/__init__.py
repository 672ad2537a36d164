"""
Models package initialization
Import all models here to ensure they are registered with SQLAlchemy
"""

from app.models.exercise import Exercise

__all__ = [
    "Exercise",
]
