"""Topic model."""
from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String, Text

from app.database import Base


class Topic(Base):
    """Topic with a branded cover image."""

    __tablename__ = "topics"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(20), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    # Stored file name of the cover; empty until the image is uploaded
    cover = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
