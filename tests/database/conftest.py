# tests/database/conftest.py
from __future__ import annotations

import pytest

from dubstudio.database.models import Character, DubbingArtist, Project
from dubstudio.domain.enums import ProjectType


@pytest.fixture()
def make_artist(db):
    def _make(first="Ayse", last="Yilmaz") -> DubbingArtist:
        a = DubbingArtist(first_name=first, last_name=last)
        db.add(a)
        db.flush()
        return a
    return _make


@pytest.fixture()
def make_project(db):
    def _make(slug="test-game", title="Test Game", type_=ProjectType.game) -> Project:
        p = Project(title=title, slug=slug, type=type_, is_published=True)
        db.add(p)
        db.flush()
        return p
    return _make


@pytest.fixture()
def make_character(db):
    def _make(project: Project, name="Hero") -> Character:
        c = Character(project_id=project.id, name=name)
        db.add(c)
        db.flush()
        return c
    return _make
