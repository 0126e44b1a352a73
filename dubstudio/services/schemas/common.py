from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


_LOC_ROOTS = ("body", "path", "query", "header", "form")


def field_errors_from(exc: ValidationError, *, request_locations: bool = False) -> Dict[str, List[str]]:
    """
    Flatten pydantic validation errors into {top_level_field: [messages]}.
    Nested locations (e.g. assignments.1.role) are folded into the top-level
    key with the position kept in the message.

    FastAPI request errors prefix every location with where the value came
    from ("body", "query", ...); pass `request_locations=True` to drop that
    leading part. Model errors are used as-is, so a field called `body` keeps
    its own key.
    """
    out: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        if request_locations and loc and loc[0] in _LOC_ROOTS:
            loc = loc[1:]
        key = str(loc[0]) if loc else "general"
        rest = ".".join(str(p) for p in loc[1:])
        msg = err.get("msg", "Invalid value")
        out.setdefault(key, []).append(f"{rest}: {msg}" if rest else msg)
    return out
