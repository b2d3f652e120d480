"""Tests for the topics HTTP API."""
import pytest
from fastapi.testclient import TestClient

from app.database import get_db
from app.main import app
from app.models.topic import Topic
from app.services.topics.cover import get_cover_pipeline


@pytest.fixture
def client(db, pipeline):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cover_pipeline] = lambda: pipeline
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def jpeg_file(image_bytes):
    return ("cover.jpg", image_bytes(), "image/jpeg")


def test_create_topic(client, jpeg_file):
    response = client.post(
        "/api/topics",
        data={"name": "Rust", "description": "A systems language"},
        files={"cover": jpeg_file},
        headers={"accept": "image/webp,*/*"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Rust"
    assert set(body["cover"]) == {"o", "s", "m", "l"}
    assert body["cover"]["o"].startswith(f"/upload/topic-cover/{body['id']}/")
    assert body["cover"]["o"].endswith(".webp")


def test_create_topic_reports_all_errors(client):
    response = client.post("/api/topics", data={"name": "x" * 21})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "FIELD_VERIFY_FAILED"
    assert body["errors"] == {
        "name": "name too long",
        "description": "description required",
        "cover": "cover required",
    }


def test_get_missing_topic(client):
    response = client.get("/api/topics/42")

    assert response.status_code == 404
    assert response.json()["code"] == "TOPIC_NOT_FOUND"


def test_list_topics_uses_default_cover(client, db):
    db.add(Topic(name="Empty", description="no cover yet", cover=""))
    db.commit()

    response = client.get("/api/topics", headers={"accept": "image/png"})

    assert response.status_code == 200
    [topic] = response.json()
    assert topic["cover"]["o"] == "/static/default/topic_cover.jpg"


def test_update_topic_description(client, jpeg_file):
    created = client.post(
        "/api/topics",
        data={"name": "Rust", "description": "A systems language"},
        files={"cover": jpeg_file},
    ).json()

    response = client.patch(f"/api/topics/{created['id']}", data={"description": "new desc"})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Rust"
    assert body["description"] == "new desc"
    assert body["cover"] == created["cover"]


def test_update_missing_topic(client):
    response = client.patch("/api/topics/42", data={"name": "x" * 30})

    assert response.status_code == 404
    assert response.json()["code"] == "TOPIC_NOT_FOUND"


def test_update_topic_rejects_empty_fields(client, jpeg_file):
    created = client.post(
        "/api/topics",
        data={"name": "Rust", "description": "A systems language"},
        files={"cover": jpeg_file},
    ).json()

    response = client.patch(f"/api/topics/{created['id']}", data={"name": "", "description": ""})

    assert response.status_code == 400
    assert response.json()["errors"] == {
        "name": "name required",
        "description": "description required",
    }
    assert client.get(f"/api/topics/{created['id']}").json()["name"] == "Rust"
