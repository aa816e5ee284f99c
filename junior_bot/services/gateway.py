# file: junior_bot/services/gateway.py

import logging
from dataclasses import dataclass, field
from typing import Callable

from fastapi import Request
from sqlalchemy.orm import Session

from junior_bot.core.settings import settings
from junior_bot.db.session import SessionLocal
from junior_bot.services.credentials_store import LocalAuthStore
from junior_bot.services.groups_service import GroupService
from junior_bot.services.inbound_service import InboundPipeline
from junior_bot.services.outbound_service import CancellationToken, OutboundDispatcher
from junior_bot.services.ports import ChatNetwork
from junior_bot.services.responder import Responder, build_responder
from junior_bot.services.session_manager import SessionManager
from junior_bot.services.whatsapp_client import WhatsAppClient

logger = logging.getLogger("gateway")


@dataclass
class Gateway:
    """Tudo que fala com o WhatsApp, uma instância por processo."""

    sessions: SessionManager
    dispatcher: OutboundDispatcher
    groups: GroupService
    pipeline: InboundPipeline
    bulk_jobs: dict[str, CancellationToken] = field(default_factory=dict)


def build_gateway(
    network: ChatNetwork | None = None,
    credentials: LocalAuthStore | None = None,
    responder: Responder | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
    send_timeout: float | None = None,
    default_delay_ms: int | None = None,
) -> Gateway:
    network = network or WhatsAppClient()
    credentials = credentials or LocalAuthStore(settings.WHATSAPP_SESSION_DIR, settings.WHATSAPP_SESSION_ID)

    sessions = SessionManager(network, credentials)
    dispatcher = OutboundDispatcher(sessions, send_timeout=send_timeout, default_delay_ms=default_delay_ms)
    groups = GroupService(sessions, timeout=send_timeout)
    pipeline = InboundPipeline(
        sessions,
        dispatcher,
        responder or build_responder(),
        session_factory,
    )

    return Gateway(sessions=sessions, dispatcher=dispatcher, groups=groups, pipeline=pipeline)


def get_gateway(request: Request) -> Gateway:
    return request.app.state.gateway
