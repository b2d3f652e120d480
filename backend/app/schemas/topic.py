"""Topic schemas."""
from datetime import datetime
from pydantic import BaseModel


class TopicErrorResponse(BaseModel):
    """Schema for topic service errors."""

    code: str
    message: str
    errors: dict[str, str] | None = None


class Topic(BaseModel):
    """Schema for topic response.

    ``cover`` maps size tags (``o``, ``s``, ``m``, ``l``) to image URLs,
    falling back to the default cover when none was uploaded.
    """

    id: int
    name: str
    description: str
    cover: dict[str, str]
    created_at: datetime
    updated_at: datetime
