from __future__ import annotations
from enum import StrEnum

class PlaceholderKind(StrEnum):
    banner = "banner"
    cover = "cover"
    avatar = "avatar"
