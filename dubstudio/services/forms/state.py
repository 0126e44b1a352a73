# dubstudio/services/forms/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import httpx

NETWORK_ERROR = "A network error occurred. Please check your connection and try again."


@dataclass(frozen=True)
class SelectedImage:
    """A file picked by the user but not uploaded yet."""
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class FormErrors:
    fields: Dict[str, List[str]] = field(default_factory=dict)
    general: Optional[str] = None

    def add(self, name: str, message: str) -> None:
        self.fields.setdefault(name, []).append(message)

    def merge(self, errors: Mapping[str, Any]) -> None:
        """Fold a server `errors` map in; a 'general' entry becomes the banner."""
        for name, messages in errors.items():
            if isinstance(messages, str):
                messages = [messages]
            if name == "general":
                self.general = "; ".join(messages)
                continue
            for m in messages:
                self.add(name, str(m))

    def get(self, name: str) -> List[str]:
        return self.fields.get(name, [])

    def __bool__(self) -> bool:
        return bool(self.fields) or bool(self.general)


def response_json(resp: httpx.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def errors_from_response(data: Mapping[str, Any], fallback: str) -> FormErrors:
    """Server 4xx/5xx body -> FormErrors: `errors` inline, else `message` as the banner."""
    out = FormErrors()
    server_errors = data.get("errors")
    if isinstance(server_errors, dict) and server_errors:
        out.merge(server_errors)
    if not out:
        out.general = data.get("message") or fallback
    return out
