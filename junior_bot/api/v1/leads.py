# file: junior_bot/api/v1/leads.py

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from junior_bot.core.errors import InvalidTarget, PersistenceFailure
from junior_bot.db.session import get_db
from junior_bot.schemas.conversations import ConversationRead, ConversationReplyResponse, LeadCreate
from junior_bot.services.conversations_service import append_message, ensure_conversation
from junior_bot.services.gateway import Gateway, get_gateway
from junior_bot.services.notifications_service import lead_welcome_message, notify
from junior_bot.utils.addresses import contact_id_from_address, to_contact_address

router = APIRouter()
logger = logging.getLogger("leads_api")


@router.post("", status_code=201, response_model=ConversationReplyResponse)
async def create_lead(
    payload: LeadCreate,
    db: Session = Depends(get_db),
    gateway: Gateway = Depends(get_gateway),
):
    # mesmo identificador usado pelas mensagens recebidas (só dígitos)
    try:
        phone = contact_id_from_address(to_contact_address(payload.phone))
    except InvalidTarget as e:
        raise HTTPException(status_code=422, detail=str(e))

    welcome = lead_welcome_message(payload.name)

    try:
        conversation = ensure_conversation(db, phone, payload.name)
        append_message(db, conversation, "bot", welcome)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    notification = await notify(gateway.dispatcher, phone, welcome, "lead")

    logger.info(f"[lead] {payload.name} ({phone}) conversa={conversation.conversation_id}")

    return ConversationReplyResponse(
        **ConversationRead.model_validate(conversation).model_dump(),
        notification=notification,
    )
