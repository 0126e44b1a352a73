# dubstudio/domain/entities/assignment.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from dubstudio.domain.enums.role_in_project import RoleInProject


@dataclass(frozen=True)
class AssignmentSpec:
    """
    One artist credited on a project in one role. Character ids only carry
    meaning for voice actors; the (artist_id, role) pair identifies the
    assignment within its project.
    """
    artist_id: int
    role: RoleInProject
    character_ids: Tuple[int, ...] = field(default_factory=tuple)

    def key(self) -> Tuple[int, RoleInProject]:
        return (self.artist_id, self.role)
