from dubstudio.domain.enums.project_type import ProjectType
from dubstudio.domain.enums.role_in_project import RoleInProject
from dubstudio.domain.enums.user_role import UserRole
from dubstudio.domain.enums.upload_context import UploadContext
from dubstudio.domain.enums.placeholder_kind import PlaceholderKind
__all__ = [
    "ProjectType",
    "RoleInProject",
    "UserRole",
    "UploadContext",
    "PlaceholderKind",
]
