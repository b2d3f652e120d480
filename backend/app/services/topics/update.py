"""Topic creation and update service."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ValidationError
from app.models.topic import Topic
from app.services.images.pipeline import ImagePipeline, UploadedImage
from app.services.topics.rules import collect_field_errors

logger = logging.getLogger(__name__)

NAME_EXISTS = "name already exists"


class TopicUpdateService:
    """Create and update topics together with their cover images."""

    def __init__(self, db: Session, images: ImagePipeline):
        """Initialize the service.

        Args:
            db: Database session
            images: Pipeline storing topic cover images
        """
        self.db = db
        self.images = images

    def create(self, name: str, description: str, cover: UploadedImage | None = None) -> int:
        """Create a topic and upload its cover.

        The row is inserted before the cover is stored; if the upload fails
        the topic remains with an empty cover.

        Returns:
            Id of the new topic
        """
        self._create_validation(name, description, cover)

        topic = Topic(name=name, description=description, cover="")
        self.db.add(topic)
        self.db.commit()
        topic_id = topic.id
        logger.info("Created topic %s (%s)", topic_id, name)

        filename = self.images.upload_image(topic_id, cover)
        self._update_fields(topic_id, {"cover": filename})
        logger.info("Stored cover %s for topic %s", filename, topic_id)

        return topic_id

    def update(
        self,
        topic_id: int,
        name: str | None = None,
        description: str | None = None,
        cover: UploadedImage | None = None,
    ) -> None:
        """Update the given fields of a topic; None leaves a field unchanged."""
        topic = self._update_validation(topic_id, name, description, cover)
        old_cover = topic.cover

        data = {}
        if name is not None:
            data["name"] = name
        if description is not None:
            data["description"] = description

        if data:
            self._update_fields(topic_id, data)
            logger.info("Updated topic %s fields: %s", topic_id, ", ".join(sorted(data)))

        if cover is not None:
            self.images.delete_image(topic_id, old_cover)
            filename = self.images.upload_image(topic_id, cover)
            self._update_fields(topic_id, {"cover": filename})
            logger.info("Replaced cover of topic %s with %s", topic_id, filename)

    def _create_validation(
        self, name: str, description: str, cover: UploadedImage | None
    ) -> None:
        errors = collect_field_errors(self.images, name, description, cover, required=True)

        if not errors and self._name_taken(name):
            errors["name"] = NAME_EXISTS

        if errors:
            raise ValidationError(errors)

    def _update_validation(
        self,
        topic_id: int,
        name: str | None,
        description: str | None,
        cover: UploadedImage | None,
    ) -> Topic:
        topic = self.db.query(Topic).filter(Topic.id == topic_id).first()
        if not topic:
            raise NotFoundError()

        errors = collect_field_errors(self.images, name, description, cover, required=False)

        if not errors and name is not None and self._name_taken(name, exclude_id=topic_id):
            errors["name"] = NAME_EXISTS

        if errors:
            raise ValidationError(errors)

        return topic

    def _name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        query = self.db.query(Topic.id).filter(Topic.name == name)
        if exclude_id is not None:
            query = query.filter(Topic.id != exclude_id)
        return query.first() is not None

    def _update_fields(self, topic_id: int, data: dict[str, str]) -> None:
        self.db.query(Topic).filter(Topic.id == topic_id).update(data)
        self.db.commit()
