# dubstudio/database/models/__init__.py

from dubstudio.database.core.main import Base
from dubstudio.database.models.taxonomy import (
    Category,
    ProjectCategory,
)
from dubstudio.database.models.project import (
    Project,
    Character,
)
from dubstudio.database.models.artist import (
    DubbingArtist,
    ProjectAssignment,
    AssignmentCharacter,
)
from dubstudio.database.models.user import (
    User,
    Message,
)

__all__ = [
    "Base",
    "Category",
    "ProjectCategory",
    "Project",
    "Character",
    "DubbingArtist",
    "ProjectAssignment",
    "AssignmentCharacter",
    "User",
    "Message",
]
