from __future__ import annotations
from enum import StrEnum

class ProjectType(StrEnum):
    game = "game"
    anime = "anime"
