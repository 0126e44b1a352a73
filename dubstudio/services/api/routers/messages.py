# dubstudio/services/api/routers/messages.py
from __future__ import annotations

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dubstudio.common.settings import get_settings
from dubstudio.database.models.user import Message, User
from dubstudio.database.repos.message_repo import MessageRepo
from dubstudio.database.repos.user_repo import UserRepo
from dubstudio.domain.errors import BadRequestError, NotFoundError
from dubstudio.services.api.deps import current_user, json_body, transactional_session
from dubstudio.services.schemas.messages import MessageCreate, MessageRead, UnreadCount

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/messages", tags=["messages"])


def _message_or_404(db: Session, message_id: int, user: User) -> Message:
    msg = MessageRepo(db).get_for(message_id, user.id)
    if not msg:
        raise NotFoundError("Message", message_id)
    return msg


@router.post("", response_model=MessageRead, status_code=HTTPStatus.CREATED)
def send_message(
    user: User = Depends(current_user),
    payload: MessageCreate = Depends(json_body(MessageCreate)),
    db: Session = Depends(transactional_session),
) -> MessageRead:
    recipient = UserRepo(db).get_by_username(payload.recipient_username)
    if recipient is None:
        raise NotFoundError("Recipient", payload.recipient_username)
    if recipient.id == user.id:
        raise BadRequestError("You cannot send a message to yourself.")

    msg = MessageRepo(db).send(
        sender_id=user.id,
        recipient_id=recipient.id,
        subject=(payload.subject or "").strip() or None,
        body=payload.body,
    )
    db.flush()
    db.refresh(msg)
    return MessageRead.model_validate(msg)


@router.get("/inbox", response_model=List[MessageRead])
def inbox(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: User = Depends(current_user),
    db: Session = Depends(transactional_session),
) -> List[MessageRead]:
    return [MessageRead.model_validate(m) for m in MessageRepo(db).inbox(user.id, limit=limit, offset=offset)]


@router.get("/sent", response_model=List[MessageRead])
def sent(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: User = Depends(current_user),
    db: Session = Depends(transactional_session),
) -> List[MessageRead]:
    return [MessageRead.model_validate(m) for m in MessageRepo(db).sent(user.id, limit=limit, offset=offset)]


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(
    user: User = Depends(current_user),
    db: Session = Depends(transactional_session),
) -> UnreadCount:
    return UnreadCount(count=MessageRepo(db).unread_count(user.id))


@router.get("/{message_id}", response_model=MessageRead)
def read_message(
    message_id: int,
    user: User = Depends(current_user),
    db: Session = Depends(transactional_session),
) -> MessageRead:
    msg = _message_or_404(db, message_id, user)
    if msg.recipient_id == user.id:
        MessageRepo(db).mark_read(msg)
        db.flush()
    return MessageRead.model_validate(msg)


@router.delete("/{message_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_message(
    message_id: int,
    user: User = Depends(current_user),
    db: Session = Depends(transactional_session),
) -> None:
    msg = _message_or_404(db, message_id, user)
    MessageRepo(db).delete_for(msg, user.id)
    return None
