from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from dubstudio.common.logging import get_logger
from dubstudio.database.models.project import Project, Character
from dubstudio.database.models.artist import ProjectAssignment
from dubstudio.database.models.taxonomy import Category
from dubstudio.domain.entities.assignment import AssignmentSpec
from dubstudio.domain.enums import RoleInProject

logger = get_logger(__name__)

# ORM attribute names accepted by create()/apply_scalars()
SCALAR_FIELDS = (
    "title",
    "slug",
    "type",
    "description",
    "cover_image_public_id",
    "banner_image_public_id",
    "release_date",
    "is_published",
    "price",
    "currency",
    "external_watch_url",
    "trailer_url",
)


class ProjectRepo:
    """
    Persistence for the project aggregate (project row + category links +
    assignments with their character links). Nothing here commits; callers
    own the transaction so the whole aggregate lands together or not at all.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------- reads --------

    def get(self, project_id: int) -> Optional[Project]:
        return self.db.get(Project, project_id)

    def get_by_slug(self, slug: str) -> Optional[Project]:
        stmt = select(Project).where(Project.slug == slug).limit(1)
        return self.db.execute(stmt).scalars().first()

    def list(self, *, q: str = "", limit: int = 50, offset: int = 0) -> List[Project]:
        stmt = select(Project)
        q = (q or "").strip().lower()
        if q:
            stmt = stmt.where(func.lower(Project.title).like(f"%{q}%"))
        stmt = stmt.order_by(Project.release_date.desc(), Project.id.desc()).limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars().all())

    def slug_taken(self, slug: str, *, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Project.id).where(Project.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Project.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    # -------- scalar writes --------

    def create(self, values: Dict[str, Any]) -> Project:
        obj = Project(**{k: values[k] for k in SCALAR_FIELDS if k in values})
        self.db.add(obj)
        self.db.flush()  # id needed for the link tables
        return obj

    def apply_scalars(self, project: Project, values: Dict[str, Any]) -> Project:
        for k in SCALAR_FIELDS:
            if k in values:
                setattr(project, k, values[k])
        return project

    # -------- collections (authoritative replacement) --------

    def replace_categories(self, project: Project, category_ids: Iterable[int]) -> List[Category]:
        ids = sorted(set(category_ids))
        cats: List[Category] = []
        if ids:
            cats = list(self.db.execute(select(Category).where(Category.id.in_(ids))).scalars().all())
        project.categories = cats
        return cats

    def replace_assignments(self, project: Project, incoming: Sequence[AssignmentSpec]) -> List[ProjectAssignment]:
        """
        Make the stored assignments exactly `incoming`.

        Rows are matched on (artist_id, role): a match keeps its row id and has
        its character links re-derived, persisted rows with no match are
        deleted, and the rest are inserted.
        """
        existing: Dict[Tuple[int, RoleInProject], ProjectAssignment] = {
            (a.artist_id, a.role): a for a in project.assignments
        }
        char_ids = {cid for spec in incoming for cid in spec.character_ids}
        chars_by_id: Dict[int, Character] = {}
        if char_ids:
            rows = self.db.execute(select(Character).where(Character.id.in_(char_ids))).scalars().all()
            chars_by_id = {c.id: c for c in rows}

        kept: List[ProjectAssignment] = []
        for spec in incoming:
            row = existing.pop(spec.key(), None)
            if row is None:
                row = ProjectAssignment(artist_id=spec.artist_id, role=spec.role)
            # same order the relationship loads with (Character.id)
            characters = (
                [chars_by_id[cid] for cid in sorted(set(spec.character_ids)) if cid in chars_by_id]
                if spec.role.takes_characters else []
            )
            row.characters = characters
            kept.append(row)

        if existing:
            logger.debug("Dropping %d assignment(s) from project %s", len(existing), project.id)
        # delete-orphan cascade removes whatever is no longer in the list
        project.assignments = kept
        return kept
