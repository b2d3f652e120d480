"""Topics API router."""
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session
from starlette.datastructures import FormData

from app.database import get_db
from app.exceptions import NotFoundError
from app.models.topic import Topic
from app.schemas.topic import Topic as TopicSchema, TopicErrorResponse
from app.services.images.negotiation import supports_webp
from app.services.images.pipeline import ImagePipeline
from app.services.topics.cover import get_cover_pipeline
from app.services.topics.update import TopicUpdateService

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": TopicErrorResponse},
    404: {"model": TopicErrorResponse},
}


def get_topic_service(
    db: Session = Depends(get_db),
    images: ImagePipeline = Depends(get_cover_pipeline),
) -> TopicUpdateService:
    return TopicUpdateService(db, images)


def serialize_topic(topic: Topic, images: ImagePipeline, request: Request) -> TopicSchema:
    """Build the response schema with cover URLs negotiated for the client."""
    return TopicSchema(
        id=topic.id,
        name=topic.name,
        description=topic.description,
        cover=images.brand_urls(topic.id, topic.cover, supports_webp(request)),
        created_at=topic.created_at,
        updated_at=topic.updated_at,
    )


async def get_submitted_form(request: Request) -> FormData:
    """Raw form body; FastAPI collapses empty optional fields to their default."""
    return await request.form()


def submitted_text(form: FormData, key: str, value: str | None) -> str | None:
    """Keep an empty submitted field apart from an omitted one."""
    if value is None and isinstance(form.get(key), str):
        return form[key]
    return value


def load_topic(db: Session, topic_id: int) -> Topic:
    topic = db.query(Topic).filter(Topic.id == topic_id).first()
    if not topic:
        raise NotFoundError()
    return topic


@router.get("", response_model=list[TopicSchema])
def list_topics(
    request: Request,
    db: Session = Depends(get_db),
    images: ImagePipeline = Depends(get_cover_pipeline),
):
    """List all topics."""
    topics = db.query(Topic).order_by(Topic.id).all()
    return [serialize_topic(topic, images, request) for topic in topics]


@router.get("/{topic_id}", response_model=TopicSchema, responses=ERROR_RESPONSES)
def get_topic(
    topic_id: int,
    request: Request,
    db: Session = Depends(get_db),
    images: ImagePipeline = Depends(get_cover_pipeline),
):
    """Get a topic by ID."""
    return serialize_topic(load_topic(db, topic_id), images, request)


@router.post("", response_model=TopicSchema, status_code=201, responses=ERROR_RESPONSES)
def create_topic(
    request: Request,
    name: str = Form(""),
    description: str = Form(""),
    cover: UploadFile | None = File(None),
    service: TopicUpdateService = Depends(get_topic_service),
):
    """Create a new topic with its cover image."""
    topic_id = service.create(name, description, cover)
    return serialize_topic(load_topic(service.db, topic_id), service.images, request)


@router.patch("/{topic_id}", response_model=TopicSchema, responses=ERROR_RESPONSES)
def update_topic(
    topic_id: int,
    request: Request,
    name: str | None = Form(None),
    description: str | None = Form(None),
    cover: UploadFile | None = File(None),
    form: FormData = Depends(get_submitted_form),
    service: TopicUpdateService = Depends(get_topic_service),
):
    """Update a topic; omitted fields are left unchanged."""
    name = submitted_text(form, "name", name)
    description = submitted_text(form, "description", description)
    service.update(topic_id, name=name, description=description, cover=cover)
    return serialize_topic(load_topic(service.db, topic_id), service.images, request)
