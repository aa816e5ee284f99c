# file: junior_bot/api/v1/session.py

import logging
from fastapi import APIRouter, Depends, HTTPException

from junior_bot.core.errors import SessionError
from junior_bot.schemas.whatsapp import SessionStatus
from junior_bot.services.gateway import Gateway, get_gateway

router = APIRouter()
logger = logging.getLogger("session_api")


@router.get("", response_model=SessionStatus)
async def get_session_status(gateway: Gateway = Depends(get_gateway)):
    return gateway.sessions.status()


@router.post("/initialize", response_model=SessionStatus)
async def initialize_session(gateway: Gateway = Depends(get_gateway)):
    try:
        return await gateway.sessions.initialize()
    except SessionError as e:
        raise HTTPException(status_code=502, detail=f"falha iniciando sessão WhatsApp: {e}")


@router.post("/logout", response_model=SessionStatus)
async def logout_session(gateway: Gateway = Depends(get_gateway)):
    logger.info("[session] logout solicitado pelo dashboard")
    try:
        return await gateway.sessions.logout()
    except SessionError as e:
        raise HTTPException(status_code=502, detail=str(e))
