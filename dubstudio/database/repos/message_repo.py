from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, func, or_, and_
from sqlalchemy.orm import Session

from dubstudio.database.models.user import Message


class MessageRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    def send(self, *, sender_id: int, recipient_id: int, body: str, subject: str | None = None) -> Message:
        msg = Message(sender_id=sender_id, recipient_id=recipient_id, subject=subject, body=body)
        self.db.add(msg)
        return msg

    def get_for(self, message_id: int, user_id: int) -> Optional[Message]:
        """A message visible to `user_id` (a participant who hasn't deleted it)."""
        stmt = select(Message).where(
            Message.id == message_id,
            or_(
                and_(Message.sender_id == user_id, Message.deleted_by_sender.is_(False)),
                and_(Message.recipient_id == user_id, Message.deleted_by_recipient.is_(False)),
            ),
        )
        return self.db.execute(stmt.limit(1)).scalars().first()

    def inbox(self, user_id: int, *, limit: int = 50, offset: int = 0) -> List[Message]:
        stmt = (
            select(Message)
            .where(Message.recipient_id == user_id, Message.deleted_by_recipient.is_(False))
            .order_by(Message.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars().all())

    def sent(self, user_id: int, *, limit: int = 50, offset: int = 0) -> List[Message]:
        stmt = (
            select(Message)
            .where(Message.sender_id == user_id, Message.deleted_by_sender.is_(False))
            .order_by(Message.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars().all())

    def unread_count(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(Message).where(
            Message.recipient_id == user_id,
            Message.deleted_by_recipient.is_(False),
            Message.read_at.is_(None),
        )
        return int(self.db.execute(stmt).scalar_one())

    def mark_read(self, msg: Message) -> Message:
        if msg.read_at is None:
            msg.read_at = datetime.now(timezone.utc)
        return msg

    def delete_for(self, msg: Message, user_id: int) -> None:
        if msg.sender_id == user_id:
            msg.deleted_by_sender = True
        if msg.recipient_id == user_id:
            msg.deleted_by_recipient = True
        if msg.deleted_by_sender and msg.deleted_by_recipient:
            self.db.delete(msg)
