# tests/services/test_artists_characters_api.py
from __future__ import annotations

ARTISTS = "/api/admin/artists"


def test_artist_crud(api_client, admin_headers):
    r = api_client.post(ARTISTS, json={"firstName": "Ada", "lastName": "Kaya", "bio": "Lead VA"}, headers=admin_headers)
    assert r.status_code == 201, r.text
    artist = r.json()
    assert artist["fullName"] == "Ada Kaya"
    assert artist["imageUrl"] == "/images/default-avatar.png"

    r = api_client.put(f"{ARTISTS}/{artist['id']}", json={"lastName": "Yildiz"}, headers=admin_headers)
    assert r.json()["fullName"] == "Ada Yildiz"

    assert [a["id"] for a in api_client.get(ARTISTS, params={"q": "yil"}, headers=admin_headers).json()] == [artist["id"]]

    assert api_client.delete(f"{ARTISTS}/{artist['id']}", headers=admin_headers).status_code == 204
    assert api_client.get(f"{ARTISTS}/{artist['id']}", headers=admin_headers).status_code == 404


def test_assigned_artist_cannot_be_deleted(api_client, admin_headers, catalog):
    ada = catalog["artists"][0]
    r = api_client.post(
        "/api/admin/projects",
        json={
            "title": "Frieren", "slug": "frieren", "type": "anime",
            "releaseDate": "2023-09-29T00:00:00+00:00",
            "assignments": [{"artistId": ada.id, "role": "DIRECTOR"}],
        },
        headers=admin_headers,
    )
    assert r.status_code == 201, r.text

    r = api_client.delete(f"{ARTISTS}/{ada.id}", headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["constraint"] == "fk_project_assignment_artist_id_dubbing_artist"


def test_characters_per_project(api_client, admin_headers, catalog):
    api_client.post(
        "/api/admin/projects",
        json={"title": "Frieren", "slug": "frieren", "type": "anime", "releaseDate": "2023-09-29T00:00:00+00:00"},
        headers=admin_headers,
    )
    base = "/api/admin/projects/frieren/characters"

    r = api_client.post(base, json={"name": "Fern"}, headers=admin_headers)
    assert r.status_code == 201
    fern = r.json()

    assert api_client.post(base, json={"name": "Fern"}, headers=admin_headers).status_code == 409
    assert [c["name"] for c in api_client.get(base, headers=admin_headers).json()] == ["Fern"]

    assert api_client.delete(f"/api/admin/characters/{fern['id']}", headers=admin_headers).status_code == 204
    assert api_client.get(base, headers=admin_headers).json() == []
    assert api_client.get("/api/admin/projects/nope/characters", headers=admin_headers).status_code == 404
