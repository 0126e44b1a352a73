# dubstudio/database/models/project.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import (
    Boolean, DateTime, Enum as SAEnum, ForeignKey, Numeric, String, Text,
    UniqueConstraint, Index, text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dubstudio.database.core.main import Base
from dubstudio.database.core.service_object import ServiceObject
from dubstudio.database.models._tables import _t
from dubstudio.domain.enums import ProjectType

if TYPE_CHECKING:
    from .artist import ProjectAssignment
    from .taxonomy import Category


class Project(ServiceObject, Base):
    __tablename__ = "project"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_project_slug"),
        Index("ix_project_type", "type"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[ProjectType] = mapped_column(SAEnum(ProjectType, name="project_type"), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # image host public ids
    cover_image_public_id: Mapped[Optional[str]] = mapped_column(String(255))
    banner_image_public_id: Mapped[Optional[str]] = mapped_column(String(255))

    release_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))

    # pricing (games only)
    price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False))
    currency: Mapped[Optional[str]] = mapped_column(String(3))

    external_watch_url: Mapped[Optional[str]] = mapped_column(Text)
    trailer_url: Mapped[Optional[str]] = mapped_column(Text)

    # relationships
    categories: Mapped[List["Category"]] = relationship(
        "Category",
        secondary=lambda: _t("project_category"),
        order_by="Category.name",
        lazy="selectin",
    )
    assignments: Mapped[List["ProjectAssignment"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProjectAssignment.id",
        lazy="selectin",
    )
    characters: Mapped[List["Character"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Character.name",
    )

    def __repr__(self) -> str:
        return f"<Project id={self.id} slug={self.slug!r}>"


class Character(ServiceObject, Base):
    __tablename__ = "character"
    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_character_project_name"),
        Index("ix_character_project_id", "project_id"),
    )

    project_id: Mapped[int] = mapped_column(
        ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    image_public_id: Mapped[Optional[str]] = mapped_column(String(255))

    project: Mapped[Project] = relationship(back_populates="characters")

    def __repr__(self) -> str:
        return f"<Character id={self.id} name={self.name!r}>"
