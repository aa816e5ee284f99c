# file: junior_bot/api/v1/conversations.py

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from junior_bot.core.errors import PersistenceFailure
from junior_bot.db.session import get_db
from junior_bot.schemas.conversations import (
    ConversationRead,
    ConversationReplyResponse,
    ConversationStatusUpdate,
    ReplyRequest,
)
from junior_bot.services.conversations_service import (
    append_message,
    get_conversation,
    list_conversations,
    set_status,
)
from junior_bot.services.gateway import Gateway, get_gateway
from junior_bot.services.notifications_service import notify

router = APIRouter()
logger = logging.getLogger("conversations_api")


def _get_or_404(db: Session, conversation_id: str):
    conversation = get_conversation(db, conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversa não encontrada")
    return conversation


@router.get("", response_model=list[ConversationRead])
def get_conversations(db: Session = Depends(get_db)):
    return list_conversations(db)


@router.get("/{conversation_id}", response_model=ConversationRead)
def get_conversation_detail(conversation_id: str, db: Session = Depends(get_db)):
    return _get_or_404(db, conversation_id)


@router.post("/{conversation_id}/reply", response_model=ConversationReplyResponse)
async def reply_to_conversation(
    conversation_id: str,
    payload: ReplyRequest,
    db: Session = Depends(get_db),
    gateway: Gateway = Depends(get_gateway),
):
    conversation = _get_or_404(db, conversation_id)

    # 1) registro primeiro
    try:
        append_message(db, conversation, "bot", payload.message)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    # 2) envio; falha vira aviso
    notification = await notify(gateway.dispatcher, conversation.phone, payload.message, "reply")

    logger.info(f"[reply] conversa={conversation_id} enviado={notification.success}")

    return ConversationReplyResponse(
        **ConversationRead.model_validate(conversation).model_dump(),
        notification=notification,
    )


@router.patch("/{conversation_id}/status", response_model=ConversationRead)
def update_conversation_status(
    conversation_id: str,
    payload: ConversationStatusUpdate,
    db: Session = Depends(get_db),
):
    conversation = _get_or_404(db, conversation_id)
    try:
        return set_status(db, conversation, payload.status)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
