from __future__ import annotations

import pathlib
import sys
from collections.abc import Callable

import pytest
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _load_dependencies():
    from flowcrm import Config, create_app
    from backend.flowcrm.extensions import db
    from backend.flowcrm.models.workflow import Workflow

    return Config, create_app, db, Workflow


ConfigBase, create_app, db, Workflow = _load_dependencies()


class TestConfig(ConfigBase):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite+pysqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    CORS_ALLOWED_ORIGINS = "http://localhost"
    DB_INIT_MAX_RETRIES = 1
    EDITOR_DEFAULT_TEMPLATE = None
    EDITOR_MAX_SESSIONS = 20
    SAVE_RATE_LIMIT = "1000 per minute"


@pytest.fixture(scope="module")
def app():
    app = create_app(TestConfig)
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def clean_database(app):
    yield

    db.session.rollback()
    db.session.query(Workflow).delete()
    db.session.commit()


@pytest.fixture()
def open_session(client) -> Callable[..., dict]:
    """Open an editor session and close it again after the test."""

    opened: list[str] = []

    def factory(**payload) -> dict:
        response = client.post("/api/editor/sessions", json=payload)
        assert response.status_code == 201, response.get_json()
        state = response.get_json()
        opened.append(state["sessionId"])
        return state

    yield factory

    for session_id in opened:
        client.delete(f"/api/editor/sessions/{session_id}")


def trigger_record(node_id: str = "t1", **extra) -> dict:
    return {
        "id": node_id,
        "type": "trigger",
        "position": {"x": 0, "y": 0},
        "data": {"label": "Start", "type": "trigger", "subtype": "manual", "config": {}},
        **extra,
    }


def action_record(node_id: str = "a1", **extra) -> dict:
    return {
        "id": node_id,
        "type": "action",
        "position": {"x": 200, "y": 0},
        "data": {"label": "Transcribe", "type": "action", "subtype": "transcription", "config": {}},
        **extra,
    }
