# dubstudio/domain/policies/project_rules.py
"""
Validation rules for the project aggregate.

These are shared by the editing form (before anything is sent) and by the
persistence endpoint (which re-checks everything and has the final word).
All functions are pure and return error lists instead of raising.
"""
from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from dubstudio.common.naming.slugger import is_url_safe_slug
from dubstudio.domain.entities.assignment import AssignmentSpec
from dubstudio.domain.enums.project_type import ProjectType

FieldErrors = Dict[str, List[str]]

CURRENCY_LENGTH = 3


def parse_release_date(value: str) -> datetime:
    """
    'YYYY-MM-DD' (UTC midnight) or a full ISO-8601 timestamp. Raises
    ValueError for anything else.
    """
    value = value.strip()
    try:
        return datetime.combine(date.fromisoformat(value), time(0), tzinfo=timezone.utc)
    except ValueError:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _blank(v: object) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


def validate_project_fields(
    *,
    title: Optional[str],
    slug: Optional[str],
    release_date: str | date | datetime | None,
    project_type: ProjectType,
    price: Optional[float] = None,
    currency: Optional[str] = None,
    trailer_url: Optional[str] = None,
    external_watch_url: Optional[str] = None,
    check_slug_format: bool = True,
) -> FieldErrors:
    errors: FieldErrors = {}

    def add(field: str, msg: str) -> None:
        errors.setdefault(field, []).append(msg)

    if _blank(title):
        add("title", "Title is required.")
    if _blank(slug):
        add("slug", "Slug is required.")
    elif check_slug_format and not is_url_safe_slug(slug.strip()):
        add("slug", "Slug may only contain lowercase letters, digits and single dashes.")
    if _blank(release_date):
        add("releaseDate", "Release date is required.")
    elif isinstance(release_date, str):
        try:
            parse_release_date(release_date)
        except ValueError:
            add("releaseDate", "Release date must be a valid date (YYYY-MM-DD).")

    if project_type == ProjectType.game:
        if price is not None and not math.isfinite(price):
            add("price", "Price must be a number.")
        elif price is not None and price < 0:
            add("price", "Price must be 0 or positive.")
        if not _blank(currency) and len(currency.strip()) != CURRENCY_LENGTH:
            add("currency", "Currency must be exactly 3 characters.")

    if not _blank(trailer_url) and not trailer_url.strip().startswith("http"):
        add("trailerUrl", "Enter a valid URL starting with http:// or https://.")
    if not _blank(external_watch_url) and not external_watch_url.strip().startswith("http"):
        add("externalWatchUrl", "Enter a valid URL starting with http:// or https://.")

    return errors


def validate_assignments(assignments: Sequence[AssignmentSpec]) -> List[str]:
    """
    Character ids are only accepted on voice-actor rows, and the same artist
    may hold a given role at most once per project.
    """
    problems: List[str] = []
    seen: set[Tuple[int, str]] = set()
    for n, a in enumerate(assignments, start=1):
        if a.character_ids and not a.role.takes_characters:
            problems.append(f"Assignment {n}: characters can only be linked to a VOICE_ACTOR assignment.")
        if a.key() in seen:
            problems.append(f"Assignment {n}: artist {a.artist_id} already has role {a.role.value}.")
        seen.add(a.key())
    return problems


def normalize_category_ids(ids: Iterable[int]) -> List[int]:
    """Category ids are a set: duplicates collapse, order is irrelevant."""
    return sorted(set(int(i) for i in ids))


def pricing_for(
    project_type: ProjectType, price: Optional[float], currency: Optional[str]
) -> Tuple[Optional[float], Optional[str]]:
    """Only games carry a price; currency is kept only alongside a price."""
    if project_type != ProjectType.game or price is None:
        return None, None
    cur = currency.strip().upper() if not _blank(currency) else None
    return price, cur
