# tests/services/test_categories_api.py
from __future__ import annotations

from dubstudio.database.models import Category

BASE = "/api/admin/categories"


def _seed(db, *rows):
    db.add_all([Category(id=i, name=n, slug=s) for i, n, s in rows])
    db.commit()


def test_rename_clashing_with_other_slug_conflicts(api_client, admin_headers, db):
    _seed(db, (5, "Drama", "drama"), (7, "Action Games", "action"))

    r = api_client.put(f"{BASE}/5", json={"name": "Action"}, headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["constraint"] == "uq_category_slug"

    cats = {c["id"]: c for c in api_client.get(BASE, headers=admin_headers).json()}
    assert cats[5] == {"id": 5, "name": "Drama", "slug": "drama"}


def test_rename_derives_slug(api_client, admin_headers, db):
    _seed(db, (5, "Drama", "drama"))
    r = api_client.put(f"{BASE}/5", json={"name": "  Slice of Life "}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"id": 5, "name": "Slice of Life", "slug": "slice-of-life"}


def test_rename_keeping_own_name_is_fine(api_client, admin_headers, db):
    _seed(db, (5, "Drama", "drama"))
    r = api_client.put(f"{BASE}/5", json={"name": "Drama"}, headers=admin_headers)
    assert r.status_code == 200


def test_rename_validation_and_lookup_errors(api_client, admin_headers, db):
    _seed(db, (5, "Drama", "drama"))

    r = api_client.put(f"{BASE}/5", json={"name": "x"}, headers=admin_headers)
    assert r.status_code == 400 and "name" in r.json()["errors"]

    r = api_client.put(f"{BASE}/abc", json={"name": "Valid"}, headers=admin_headers)
    assert r.status_code == 400

    r = api_client.put(f"{BASE}/404", json={"name": "Valid"}, headers=admin_headers)
    assert r.status_code == 404


def test_category_routes_require_admin(api_client, db):
    _seed(db, (5, "Drama", "drama"))
    assert api_client.put(f"{BASE}/5", json={"name": ""}).status_code == 403
    assert api_client.delete(f"{BASE}/5").status_code == 403


def test_create_duplicate_name_conflicts(api_client, admin_headers):
    assert api_client.post(BASE, json={"name": "Horror"}, headers=admin_headers).status_code == 201
    r = api_client.post(BASE, json={"name": "Horror"}, headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["constraint"] == "uq_category_name"


def test_delete_unused_category(api_client, admin_headers, db):
    _seed(db, (5, "Drama", "drama"))
    assert api_client.delete(f"{BASE}/5", headers=admin_headers).status_code == 204
    assert api_client.get(BASE, headers=admin_headers).json() == []
    assert api_client.delete(f"{BASE}/5", headers=admin_headers).status_code == 404


def test_delete_referenced_category_conflicts(api_client, admin_headers, db):
    _seed(db, (5, "Drama", "drama"))
    r = api_client.post(
        "/api/admin/projects",
        json={
            "title": "Frieren", "slug": "frieren", "type": "anime",
            "releaseDate": "2023-09-29T00:00:00+00:00", "categoryIds": [5],
        },
        headers=admin_headers,
    )
    assert r.status_code == 201, r.text

    r = api_client.delete(f"{BASE}/5", headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["constraint"] == "fk_project_category_category_id_category"

    assert [c["id"] for c in api_client.get(BASE, headers=admin_headers).json()] == [5]
    project = api_client.get("/api/admin/projects/frieren", headers=admin_headers).json()
    assert project["categoryIds"] == [5]
