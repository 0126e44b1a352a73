# dubstudio/services/forms/project_form.py
"""
Client-side editing state for one project.

ProjectForm mirrors the shape returned by GET /api/admin/projects/{slug},
validates it with the same rules the server applies, resolves newly picked
images to public ids and then sends the whole aggregate in one request.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set

import httpx

from dubstudio.common.logging import get_logger
from dubstudio.common.settings import get_settings
from dubstudio.domain.entities.assignment import AssignmentSpec
from dubstudio.domain.enums import ProjectType, RoleInProject, UploadContext
from dubstudio.domain.policies.project_rules import (
    parse_release_date, validate_assignments, validate_project_fields,
)
from dubstudio.services.forms.assets import AssetResolver, AssetUploadError
from dubstudio.services.forms.state import (
    NETWORK_ERROR, FormErrors, SelectedImage, errors_from_response, response_json,
)

logger = get_logger(__name__)

DEFAULT_CURRENCY = "TRY"


@dataclass
class AssignmentRow:
    temp_id: str
    artist_id: Optional[int]
    role: RoleInProject
    artist_name: Optional[str] = None
    character_ids: List[int] = field(default_factory=list)


@dataclass
class SubmitResult:
    ok: bool
    errors: FormErrors = field(default_factory=FormErrors)
    project: Optional[Dict[str, Any]] = None
    redirect_slug: Optional[str] = None


def _temp_id(n: int) -> str:
    return f"{int(time.time() * 1000)}-assign-{n}"


def _text(v: Any) -> str:
    return "" if v is None else str(v)


def _or_none(s: Optional[str]) -> Optional[str]:
    s = (s or "").strip()
    return s or None


def _iso_release(value: str) -> Optional[str]:
    """'YYYY-MM-DD' (or a full timestamp) -> ISO-8601 UTC timestamp; validate() has vetted it."""
    return parse_release_date(value).isoformat() if value.strip() else None


class ProjectForm:
    def __init__(
        self,
        client: httpx.Client,
        project: Optional[Mapping[str, Any]] = None,
        all_artists: Iterable[Mapping[str, Any]] = (),
        all_categories: Iterable[Mapping[str, Any]] = (),
        available_roles: Sequence[RoleInProject] = tuple(RoleInProject),
        *,
        assets: Optional[AssetResolver] = None,
    ) -> None:
        self.client = client
        self.initial: Optional[Dict[str, Any]] = dict(project) if project else None
        # {value, label} options as the pickers receive them
        self.artist_names: Dict[int, str] = {int(a["value"]): str(a["label"]) for a in all_artists}
        self.category_names: Dict[int, str] = {int(c["value"]): str(c["label"]) for c in all_categories}
        self.available_roles = tuple(available_roles)
        self.assets = assets or AssetResolver(client)
        self.base_url = f"{get_settings().api.prefix}/admin/projects"
        self.errors = FormErrors()
        self._assign_seq = 0
        self.reset()

    # ---- state ----

    @property
    def is_editing(self) -> bool:
        return self.initial is not None

    def reset(self) -> None:
        """Reload every field from the initial data (or blank for a new project)."""
        p = self.initial or {}
        self.title = _text(p.get("title"))
        self.slug = _text(p.get("slug"))
        self.type = ProjectType(p.get("type") or ProjectType.game)
        self.description = _text(p.get("description"))
        self.release_date = _text(p.get("releaseDate"))[:10]
        self.is_published = bool(p.get("isPublished", True))
        self.price = _text(p.get("price"))
        self.currency = p.get("currency") or DEFAULT_CURRENCY
        self.external_watch_url = _text(p.get("externalWatchUrl"))
        self.trailer_url = _text(p.get("trailerUrl"))

        self.cover_public_id: Optional[str] = p.get("coverImagePublicId") or None
        self.banner_public_id: Optional[str] = p.get("bannerImagePublicId") or None
        self.cover_file: Optional[SelectedImage] = None
        self.banner_file: Optional[SelectedImage] = None

        self.category_ids: Set[int] = {int(i) for i in p.get("categoryIds") or ()}
        self.assignments: List[AssignmentRow] = []
        for a in p.get("assignments") or ():
            self.assignments.append(
                AssignmentRow(
                    temp_id=self._next_temp_id(),
                    artist_id=a.get("artistId"),
                    role=RoleInProject(a["role"]),
                    artist_name=a.get("artistName"),
                    character_ids=list(a.get("characterIds") or ()),
                )
            )
        self.errors = FormErrors()

    def _next_temp_id(self) -> str:
        tid = _temp_id(self._assign_seq)
        self._assign_seq += 1
        return tid

    # ---- editing operations ----

    def add_assignment(
        self,
        artist_id: Optional[int] = None,
        role: Optional[RoleInProject] = None,
        character_ids: Iterable[int] = (),
    ) -> AssignmentRow:
        role = role or self.available_roles[0]
        row = AssignmentRow(
            temp_id=self._next_temp_id(),
            artist_id=artist_id,
            role=role,
            artist_name=self.artist_names.get(artist_id) if artist_id is not None else None,
            character_ids=list(character_ids) if role.takes_characters else [],
        )
        self.assignments.append(row)
        return row

    def update_assignment(self, temp_id: str, **changes: Any) -> AssignmentRow:
        row = self._row(temp_id)
        if "artist_id" in changes:
            row.artist_id = changes["artist_id"]
            row.artist_name = self.artist_names.get(row.artist_id)
        if "role" in changes:
            row.role = RoleInProject(changes["role"])
            if not row.role.takes_characters:
                row.character_ids = []
        if "character_ids" in changes and row.role.takes_characters:
            row.character_ids = list(dict.fromkeys(changes["character_ids"]))
        return row

    def remove_assignment(self, temp_id: str) -> None:
        self.assignments = [a for a in self.assignments if a.temp_id != temp_id]

    def _row(self, temp_id: str) -> AssignmentRow:
        for a in self.assignments:
            if a.temp_id == temp_id:
                return a
        raise KeyError(temp_id)

    def set_categories(self, ids: Iterable[int]) -> None:
        self.category_ids = {int(i) for i in ids}

    def toggle_category(self, category_id: int) -> None:
        self.category_ids ^= {int(category_id)}

    def select_cover(self, image: Optional[SelectedImage]) -> None:
        self.cover_file = image

    def select_banner(self, image: Optional[SelectedImage]) -> None:
        self.banner_file = image

    # ---- validation / payload ----

    def _price_value(self) -> Optional[float]:
        return float(self.price) if self.price.strip() else None

    def validate(self) -> FormErrors:
        errors = FormErrors()
        is_game = self.type == ProjectType.game

        price: Optional[float] = None
        if is_game and self.price.strip():
            try:
                price = self._price_value()
            except ValueError:
                errors.add("price", "Price must be a number.")

        fields = validate_project_fields(
            title=self.title,
            slug=self.slug,
            release_date=self.release_date,
            project_type=self.type,
            price=price,
            # currency only matters next to a price
            currency=self.currency if price is not None else None,
            trailer_url=self.trailer_url,
            external_watch_url=self.external_watch_url,
            check_slug_format=False,
        )
        errors.merge(fields)

        if any(a.artist_id is None for a in self.assignments):
            errors.add("assignments", "Every assignment needs an artist.")
        specs = [
            AssignmentSpec(artist_id=a.artist_id, role=a.role, character_ids=tuple(a.character_ids))
            for a in self.assignments if a.artist_id is not None
        ]
        for problem in validate_assignments(specs):
            errors.add("assignments", problem)
        return errors

    def build_payload(self, cover_id: Optional[str], banner_id: Optional[str]) -> Dict[str, Any]:
        is_game = self.type == ProjectType.game
        has_price = is_game and bool(self.price.strip())

        assignments: List[Dict[str, Any]] = []
        for a in self.assignments:
            item: Dict[str, Any] = {"artistId": a.artist_id, "role": a.role.value}
            if a.role.takes_characters and a.character_ids:
                item["characterIds"] = list(a.character_ids)
            assignments.append(item)

        return {
            "title": self.title.strip(),
            "slug": self.slug.strip(),
            "type": self.type.value,
            "description": _or_none(self.description),
            "coverImagePublicId": cover_id,
            "bannerImagePublicId": banner_id,
            "releaseDate": _iso_release(self.release_date),
            "isPublished": self.is_published,
            "price": self._price_value() if has_price else None,
            "currency": self.currency.strip().upper() if has_price and self.currency.strip() else None,
            "assignments": assignments,
            "categoryIds": sorted(self.category_ids),
            "externalWatchUrl": _or_none(self.external_watch_url),
            "trailerUrl": _or_none(self.trailer_url),
        }

    # ---- submission ----

    def submit(self) -> SubmitResult:
        """
        validate -> upload cover, then banner -> POST/PUT the aggregate.
        Any failure stops the attempt and leaves the stored project alone.
        """
        self.errors = self.validate()
        if self.errors:
            return SubmitResult(ok=False, errors=self.errors)

        cover_id, banner_id = self.cover_public_id, self.banner_public_id
        seed = self.slug or self.title
        project_id = self.initial.get("id") if self.initial else None
        try:
            if self.cover_file:
                cover_id = self.assets.resolve(self.cover_file, UploadContext.projectCover, seed, project_id)
            if self.banner_file:
                banner_id = self.assets.resolve(self.banner_file, UploadContext.projectBanner, seed, project_id)
        except AssetUploadError as e:
            self.errors.add(e.field, e.message)
            return SubmitResult(ok=False, errors=self.errors)

        payload = self.build_payload(cover_id, banner_id)
        if self.is_editing:
            initial_slug = self.initial["slug"]
            method, url = "PUT", f"{self.base_url}/{initial_slug}"
        else:
            initial_slug = None
            method, url = "POST", self.base_url

        try:
            resp = self.client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Project %s failed in transit: %s", "update" if self.is_editing else "create", e)
            self.errors.general = NETWORK_ERROR
            return SubmitResult(ok=False, errors=self.errors)

        data = response_json(resp)
        if resp.is_error:
            self.errors = errors_from_response(data, "The project could not be saved.")
            return SubmitResult(ok=False, errors=self.errors)

        self.cover_file = None
        self.banner_file = None
        self.cover_public_id = cover_id
        self.banner_public_id = banner_id

        new_slug = data.get("slug")
        redirect = new_slug if new_slug and new_slug != initial_slug else None
        self.initial = data
        logger.info("Project %s saved (%s)", new_slug, method)
        return SubmitResult(ok=True, errors=self.errors, project=data, redirect_slug=redirect)
