from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from dubstudio.services.schemas.common import CamelModel
from dubstudio.services.schemas.users import UserBrief


class MessageCreate(CamelModel):
    recipient_username: str = Field(..., min_length=3, max_length=30)
    subject: Optional[str] = Field(default=None, max_length=200)
    body: str = Field(..., min_length=1, max_length=5000)


class MessageRead(CamelModel):
    id: int
    sender: UserBrief
    recipient: UserBrief
    subject: Optional[str] = None
    body: str
    read_at: Optional[datetime] = None
    date_created: Optional[datetime] = None


class UnreadCount(CamelModel):
    count: int
