# tests/database/test_category_and_message_repos.py
import pytest
from sqlalchemy.exc import IntegrityError

from dubstudio.database.models import Category, User
from dubstudio.database.repos.category_repo import CategoryRepo
from dubstudio.database.repos.message_repo import MessageRepo
from dubstudio.database.repos.project_repo import ProjectRepo


def test_category_create_slugifies_and_detects_clash(db):
    repo = CategoryRepo(db)
    c = repo.create(name="Sci Fi & Fantasy")
    db.flush()
    assert c.slug == "sci-fi-fantasy"

    assert repo.find_clash(name="Other", slug="sci-fi-fantasy") is not None
    assert repo.find_clash(name="Sci Fi & Fantasy", slug="x") is not None
    assert repo.find_clash(name="Sci Fi & Fantasy", slug="sci-fi-fantasy", exclude_id=c.id) is None


def test_category_delete_blocked_by_project_link(db, make_project):
    cat = Category(name="Action", slug="action")
    db.add(cat)
    db.flush()
    p = make_project()
    ProjectRepo(db).replace_categories(p, [cat.id])
    db.commit()

    repo = CategoryRepo(db)
    assert repo.count_projects(cat.id) == 1
    with pytest.raises(IntegrityError):
        repo.delete(cat.id)
    db.rollback()

    assert repo.get(cat.id) is not None


def test_category_delete_unreferenced(db):
    repo = CategoryRepo(db)
    cat = repo.create(name="Horror")
    db.commit()

    repo.delete(cat.id)
    db.commit()
    db.expire_all()
    assert repo.get(cat.id) is None


def test_message_lifecycle(db):
    alice, bob = User(username="alice"), User(username="bob")
    db.add_all([alice, bob])
    db.flush()

    repo = MessageRepo(db)
    msg = repo.send(sender_id=alice.id, recipient_id=bob.id, subject="Hi", body="Casting on Friday?")
    db.commit()

    assert repo.unread_count(bob.id) == 1
    assert [m.id for m in repo.inbox(bob.id)] == [msg.id]
    assert [m.id for m in repo.sent(alice.id)] == [msg.id]

    repo.mark_read(msg)
    db.commit()
    assert repo.unread_count(bob.id) == 0

    # each side hides its own copy; the row goes once both have
    repo.delete_for(msg, alice.id)
    db.commit()
    assert repo.sent(alice.id) == []
    assert repo.get_for(msg.id, bob.id) is not None

    repo.delete_for(msg, bob.id)
    db.commit()
    assert repo.get_for(msg.id, bob.id) is None
    assert repo.inbox(bob.id) == []


def test_message_hidden_from_outsiders(db):
    alice, bob, eve = User(username="alice"), User(username="bob"), User(username="eve")
    db.add_all([alice, bob, eve])
    db.flush()

    msg = MessageRepo(db).send(sender_id=alice.id, recipient_id=bob.id, body="private")
    db.commit()
    assert MessageRepo(db).get_for(msg.id, eve.id) is None
