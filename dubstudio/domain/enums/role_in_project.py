from __future__ import annotations
from enum import StrEnum

class RoleInProject(StrEnum):
    VOICE_ACTOR = "VOICE_ACTOR"
    DIRECTOR = "DIRECTOR"
    TRANSLATOR = "TRANSLATOR"
    MIX_ENGINEER = "MIX_ENGINEER"
    PROJECT_MANAGER = "PROJECT_MANAGER"

    @property
    def takes_characters(self) -> bool:
        return self is RoleInProject.VOICE_ACTOR
