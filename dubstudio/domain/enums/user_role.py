from __future__ import annotations
from enum import StrEnum

class UserRole(StrEnum):
    user = "user"
    admin = "admin"
