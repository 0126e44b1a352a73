# dubstudio/database/models/user.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean, DateTime, Enum as SAEnum, ForeignKey, String, Text, UniqueConstraint, Index, text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dubstudio.database.core.main import Base
from dubstudio.database.core.service_object import ServiceObject
from dubstudio.domain.enums import UserRole


class User(ServiceObject, Base):
    """
    Site account. Credentials live with the external auth provider; we only
    keep the public profile and the role used for authorization.
    """
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    username: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role"),
        nullable=False,
        server_default=text("'user'"),
        default=UserRole.user,
    )
    avatar_public_id: Mapped[Optional[str]] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"


class Message(ServiceObject, Base):
    """
    Direct message between two users. Each side can delete its own copy; the
    row goes away once both have.
    """
    __tablename__ = "message"
    __table_args__ = (
        Index("ix_message_recipient_id", "recipient_id"),
        Index("ix_message_sender_id", "sender_id"),
    )

    sender_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    subject: Mapped[Optional[str]] = mapped_column(String(200))
    body: Mapped[str] = mapped_column(Text, nullable=False)
    read_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    deleted_by_sender: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"), default=False)
    deleted_by_recipient: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"), default=False)

    sender: Mapped[User] = relationship(foreign_keys=[sender_id], lazy="joined")
    recipient: Mapped[User] = relationship(foreign_keys=[recipient_id], lazy="joined")

    def __repr__(self) -> str:
        return f"<Message id={self.id} from={self.sender_id} to={self.recipient_id}>"
