"""Shared fixtures for topic service tests."""
import io

import pytest
from PIL import Image
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.datastructures import Headers, UploadFile

from app.database import Base
from app.services.images.pipeline import ImagePipeline
from app.services.topics.cover import TOPIC_COVER_BRAND
from app.services.topics.update import TopicUpdateService


def make_image_bytes(image_format="JPEG", size=(1200, 800), color=(30, 120, 200)) -> bytes:
    """Render a solid-color image in the given format."""
    mode = "P" if image_format == "GIF" else "RGB"
    image = Image.new("RGB", size, color=color)
    if mode == "P":
        image = image.convert("P")
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


def make_upload(data: bytes, filename="cover.jpg", content_type="image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def executed(engine):
    """Record SQL statements sent to the database."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine, "before_cursor_execute", record)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "upload"


@pytest.fixture
def pipeline(upload_dir):
    return ImagePipeline(
        TOPIC_COVER_BRAND,
        upload_dir=upload_dir,
        upload_url="/upload/",
        static_url="/static/",
        max_size=1024 * 1024,
    )


@pytest.fixture
def service(db, pipeline):
    return TopicUpdateService(db, pipeline)


@pytest.fixture
def jpeg_upload():
    return make_upload(make_image_bytes())


@pytest.fixture
def image_bytes():
    """Factory rendering image bytes, see make_image_bytes."""
    return make_image_bytes


@pytest.fixture
def upload_factory():
    """Factory wrapping bytes in an UploadFile, see make_upload."""
    return make_upload
