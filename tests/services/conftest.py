# tests/services/conftest.py
from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image
from starlette.testclient import TestClient

from dubstudio.database.models import Category, DubbingArtist, User
from dubstudio.domain.enums import UserRole
from dubstudio.services.api.app import create_app
from dubstudio.services.auth.tokens import issue_token
from dubstudio.services.images.local_store import LocalImageStore


@pytest.fixture()
def image_store(tmp_path) -> LocalImageStore:
    return LocalImageStore(tmp_path / "uploads")


@pytest.fixture()
def app(database, image_store):
    return create_app(database=database, image_store=image_store)


@pytest.fixture()
def api_client(app):
    """
    TestClient over an app wired to the per-test database. Each request runs
    in its own transaction, exactly as in production.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def admin_headers():
    return {"Authorization": f"Bearer {issue_token(999, 'admin', 'root')}"}


@pytest.fixture()
def users(db):
    """Two committed regular users: alice and bob."""
    alice = User(username="alice", email="alice@example.com", role=UserRole.user)
    bob = User(username="bob", email="bob@example.com", role=UserRole.user)
    db.add_all([alice, bob])
    db.commit()
    return {"alice": alice, "bob": bob}


@pytest.fixture()
def auth_for():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {issue_token(user.id, user.role.value, user.username)}"}
    return _headers


@pytest.fixture()
def catalog(db):
    """Committed artists and categories the project tests reference."""
    artists = [
        DubbingArtist(first_name="Ada", last_name="Kaya"),
        DubbingArtist(first_name="Bora", last_name="Demir"),
        DubbingArtist(first_name="Cem", last_name="Aslan"),
    ]
    categories = [Category(name="Action", slug="action"), Category(name="RPG", slug="rpg")]
    db.add_all(artists + categories)
    db.commit()
    return {"artists": artists, "categories": categories}


@pytest.fixture()
def png_bytes() -> bytes:
    buf = BytesIO()
    Image.new("RGB", (8, 12), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()
