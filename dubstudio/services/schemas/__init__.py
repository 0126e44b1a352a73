from dubstudio.services.schemas.common import (
    CamelModel,
    field_errors_from,
)
from dubstudio.services.schemas.categories import (
    CategoryRead,
    CategoryWrite,
)
from dubstudio.services.schemas.projects import (
    AssignmentIn,
    AssignmentRead,
    ProjectPayload,
    ProjectRead,
    ProjectSummary,
)
from dubstudio.services.schemas.artists import (
    ArtistCreate,
    ArtistUpdate,
    ArtistRead,
)
from dubstudio.services.schemas.characters import (
    CharacterCreate,
    CharacterRead,
)
from dubstudio.services.schemas.users import (
    UsernameUpdate,
    UserBrief,
    UserRead,
    ProfileUpdated,
)
from dubstudio.services.schemas.messages import (
    MessageCreate,
    MessageRead,
    UnreadCount,
)
from dubstudio.services.schemas.uploads import (
    UploadResult
)
__all__ = [
    "CamelModel",
    "field_errors_from",
    "CategoryRead",
    "CategoryWrite",
    "AssignmentIn",
    "AssignmentRead",
    "ProjectPayload",
    "ProjectRead",
    "ProjectSummary",
    "ArtistCreate",
    "ArtistUpdate",
    "ArtistRead",
    "CharacterCreate",
    "CharacterRead",
    "UsernameUpdate",
    "UserBrief",
    "UserRead",
    "ProfileUpdated",
    "MessageCreate",
    "MessageRead",
    "UnreadCount",
    "UploadResult",
]
