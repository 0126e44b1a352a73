# dubstudio/database/models/artist.py
from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import (
    Enum as SAEnum, ForeignKey, String, Text, UniqueConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dubstudio.database.core.main import Base
from dubstudio.database.core.service_object import ServiceObject
from dubstudio.database.models._tables import _t
from dubstudio.domain.enums import RoleInProject

if TYPE_CHECKING:
    from .project import Project, Character


# =======================
# Artists
# =======================
class DubbingArtist(ServiceObject, Base):
    __tablename__ = "dubbing_artist"
    __table_args__ = (
        Index("ix_dubbing_artist_last_name", "last_name"),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text)
    image_public_id: Mapped[Optional[str]] = mapped_column(String(255))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<DubbingArtist id={self.id} name={self.full_name!r}>"


class ProjectAssignment(ServiceObject, Base):
    """
    Artist credited on a project in one role. Voice actors additionally link
    the characters they voice (M:M via assignment_character).
    """
    __tablename__ = "project_assignment"
    __table_args__ = (
        UniqueConstraint("project_id", "artist_id", "role", name="uq_project_assignment_project_artist_role"),
        Index("ix_project_assignment_artist_id", "artist_id"),
    )

    project_id: Mapped[int] = mapped_column(
        ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    artist_id: Mapped[int] = mapped_column(
        ForeignKey("dubbing_artist.id", ondelete="RESTRICT"), nullable=False
    )
    role: Mapped[RoleInProject] = mapped_column(
        SAEnum(RoleInProject, name="role_in_project"), nullable=False
    )

    project: Mapped["Project"] = relationship(back_populates="assignments")
    artist: Mapped[DubbingArtist] = relationship(lazy="joined")
    characters: Mapped[List["Character"]] = relationship(
        "Character",
        secondary=lambda: _t("assignment_character"),
        order_by="Character.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<ProjectAssignment id={self.id} artist={self.artist_id} role={self.role}>"


class AssignmentCharacter(Base):
    """
    Association table for ProjectAssignment <-> Character.
    """
    __tablename__ = "assignment_character"
    __table_args__ = (
        Index("ix_assignment_character_character_id", "character_id"),
    )

    assignment_id: Mapped[int] = mapped_column(
        ForeignKey("project_assignment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    character_id: Mapped[int] = mapped_column(
        ForeignKey("character.id", ondelete="CASCADE"),
        primary_key=True,
    )
