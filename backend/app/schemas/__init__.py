"""Pydantic schemas for API request/response."""
from app.schemas.topic import Topic, TopicErrorResponse

__all__ = [
    "Topic",
    "TopicErrorResponse",
]
