from __future__ import annotations
from typing import List, Optional

from sqlalchemy import select, func, delete, or_
from sqlalchemy.orm import Session

from dubstudio.common.naming.slugger import slugify
from dubstudio.database.models.taxonomy import Category, ProjectCategory


class CategoryRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def list(self) -> List[Category]:
        stmt = select(Category).order_by(Category.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def missing_ids(self, ids: List[int]) -> List[int]:
        if not ids:
            return []
        found = set(self.db.execute(select(Category.id).where(Category.id.in_(ids))).scalars().all())
        return [i for i in ids if i not in found]

    def find_clash(self, *, name: str, slug: str, exclude_id: Optional[int] = None) -> Optional[Category]:
        """Another category already using this name or slug, if any."""
        stmt = select(Category).where(or_(Category.name == name, Category.slug == slug))
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return self.db.execute(stmt.limit(1)).scalars().first()

    def create(self, *, name: str) -> Category:
        obj = Category(name=name, slug=slugify(name))
        self.db.add(obj)
        return obj

    def rename(self, category: Category, *, name: str) -> Category:
        category.name = name
        category.slug = slugify(name)
        return category

    def count_projects(self, category_id: int) -> int:
        stmt = select(func.count()).select_from(ProjectCategory).where(ProjectCategory.category_id == category_id)
        return int(self.db.execute(stmt).scalar_one())

    def delete(self, category_id: int) -> None:
        # Core DELETE so the RESTRICT foreign key on project_category decides
        self.db.execute(delete(Category).where(Category.id == category_id))
