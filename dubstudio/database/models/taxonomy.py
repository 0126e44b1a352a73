# dubstudio/database/models/taxonomy.py
from __future__ import annotations

from sqlalchemy import ForeignKey, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from dubstudio.database.core.main import Base
from dubstudio.database.core.service_object import ServiceObject


# =======================
# Categories
# =======================
class Category(ServiceObject, Base):
    __tablename__ = "category"
    __table_args__ = (
        UniqueConstraint("name", name="uq_category_name"),
        UniqueConstraint("slug", name="uq_category_slug"),
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), nullable=False)

    # No relationship to Project on purpose: deleting a category must hit the
    # RESTRICT foreign key instead of the ORM silently clearing link rows.

    def __repr__(self) -> str:
        return f"<Category id={self.id} slug={self.slug!r}>"


class ProjectCategory(Base):
    """
    Association table for Project <-> Category (M:M).
    """
    __tablename__ = "project_category"
    __table_args__ = (
        Index("ix_project_category_category_id", "category_id"),
    )

    project_id: Mapped[int] = mapped_column(
        ForeignKey("project.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("category.id", ondelete="RESTRICT"),
        primary_key=True,
    )
