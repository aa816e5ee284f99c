# file: junior_bot/api/v1/webhooks_whatsapp.py

import logging
from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import ValidationError

from junior_bot.core.settings import settings
from junior_bot.schemas.whatsapp import InboundMessage, WhatsAppWebhook
from junior_bot.services.gateway import Gateway, get_gateway

router = APIRouter()
logger = logging.getLogger("webhooks_whatsapp")


# ============================================================
# Utils
# ============================================================

def _extract_message(data: dict) -> InboundMessage | None:
    raw = data.get("message") or data
    if not isinstance(raw, dict):
        return None

    if raw.get("fromMe"):
        return None

    try:
        return InboundMessage.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"⚠️ [WA webhook] mensagem inválida: {e}")
        return None


# ============================================================
# WEBHOOK PRINCIPAL
# ============================================================

@router.post("")
async def whatsapp_webhook(
    payload: WhatsAppWebhook,
    background: BackgroundTasks,
    gateway: Gateway = Depends(get_gateway),
):
    if payload.sessionId and payload.sessionId != settings.WHATSAPP_SESSION_ID:
        return {"ignored": True, "reason": "unknown_session"}

    sessions = gateway.sessions
    data = payload.data or {}
    data_type = payload.dataType

    logger.debug(f"[WA webhook] dataType={data_type}")

    # =====================================================
    # CICLO DE VIDA DA SESSÃO
    # =====================================================
    if data_type == "qr":
        qr = data.get("qr")
        if not qr:
            return {"ignored": True, "reason": "missing_qr"}
        await sessions.handle_qr(qr)

    elif data_type == "authenticated":
        await sessions.handle_authenticated(data.get("session") or data.get("credentials"))

    elif data_type == "ready":
        await sessions.handle_ready()

    elif data_type == "disconnected":
        await sessions.handle_disconnected(data.get("reason"))

    # =====================================================
    # MENSAGEM RECEBIDA
    # =====================================================
    elif data_type == "message":
        message = _extract_message(data)
        if message is None:
            return {"ignored": True, "reason": "invalid_message"}

        background.add_task(gateway.pipeline.handle_message, message)
        return {"status": "accepted"}

    else:
        return {"ignored": True, "reason": "unsupported_event"}

    return {"status": "ok", "state": sessions.state.value}
