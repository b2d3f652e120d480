"""SQLAlchemy models."""
from app.models.topic import Topic

__all__ = [
    "Topic",
]
