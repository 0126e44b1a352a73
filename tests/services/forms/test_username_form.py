# tests/services/forms/test_username_form.py
from __future__ import annotations

import httpx

from dubstudio.services.forms.username_form import UsernameForm


def test_unchanged_username_never_hits_network():
    calls = []
    client = httpx.Client(transport=httpx.MockTransport(lambda r: calls.append(r) or httpx.Response(200)))
    form = UsernameForm(client, "alice")
    form.username = " alice "

    assert form.submit() is False
    assert form.errors.general
    assert calls == []


def test_rename_via_api(api_client, users, auth_for):
    api_client.headers.update(auth_for(users["alice"]))
    form = UsernameForm(api_client, "alice")
    form.username = "alice_dub"

    assert form.submit() is True
    assert form.success_message == "Username updated successfully."
    assert form.current_username == "alice_dub"


def test_taken_username_shown_inline(api_client, users, auth_for):
    api_client.headers.update(auth_for(users["alice"]))
    form = UsernameForm(api_client, "alice")
    form.username = "bob"

    assert form.submit() is False
    assert form.errors.get("username") == ["This username is already taken."]
    assert form.errors.general is None
