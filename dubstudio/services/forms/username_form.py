# dubstudio/services/forms/username_form.py
from __future__ import annotations

from typing import Optional

import httpx

from dubstudio.common.logging import get_logger
from dubstudio.common.settings import get_settings
from dubstudio.services.forms.state import NETWORK_ERROR, FormErrors, errors_from_response, response_json

logger = get_logger(__name__)


class UsernameForm:
    def __init__(self, client: httpx.Client, current_username: str, *, endpoint: Optional[str] = None) -> None:
        self.client = client
        self.current_username = current_username
        self.username = current_username
        self.endpoint = endpoint or f"{get_settings().api.prefix}/profile"
        self.errors = FormErrors()
        self.success_message: Optional[str] = None

    def submit(self) -> bool:
        self.errors = FormErrors()
        self.success_message = None

        username = self.username.strip()
        if username == self.current_username:
            self.errors.general = "The new username is the same as the current one."
            return False

        try:
            resp = self.client.patch(self.endpoint, json={"username": username})
        except httpx.HTTPError as e:
            logger.warning("Username update failed in transit: %s", e)
            self.errors.general = NETWORK_ERROR
            return False

        data = response_json(resp)
        if resp.is_error:
            self.errors = errors_from_response(data, "Username could not be updated.")
            return False

        self.current_username = (data.get("user") or {}).get("username", username)
        self.username = self.current_username
        self.success_message = data.get("message") or "Username updated successfully."
        return True
