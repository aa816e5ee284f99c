# file: junior_bot/services/inbound_service.py

import inspect
import logging
from typing import Callable

from sqlalchemy.orm import Session

from junior_bot.core.errors import PersistenceFailure
from junior_bot.schemas.whatsapp import InboundMessage, InboundTurn
from junior_bot.services.conversations_service import (
    append_message,
    ensure_conversation,
    get_conversation_by_phone,
)
from junior_bot.services.outbound_service import OutboundDispatcher
from junior_bot.services.responder import Responder
from junior_bot.services.session_manager import SessionManager
from junior_bot.utils.addresses import contact_id_from_address, is_contact_address
from junior_bot.utils.locks import KeyedLocks

logger = logging.getLogger("inbound_service")


class InboundPipeline:
    """
    Mensagem recebida -> conversa -> resposta do bot -> envio.

    Mensagens do mesmo contato são processadas uma de cada vez;
    contatos diferentes seguem em paralelo.
    """

    def __init__(
        self,
        sessions: SessionManager,
        dispatcher: OutboundDispatcher,
        responder: Responder,
        session_factory: Callable[[], Session],
    ):
        self._sessions = sessions
        self._dispatcher = dispatcher
        self._responder = responder
        self._session_factory = session_factory
        self._locks = KeyedLocks()

    async def handle_message(self, message: InboundMessage) -> InboundTurn:
        # só contatos individuais com texto
        if not is_contact_address(message.sender) or not message.body:
            return InboundTurn(status="ignored")

        phone = contact_id_from_address(message.sender)

        async with self._locks.hold(phone):
            return await self._process_turn(message, phone)

    async def _process_turn(self, message: InboundMessage, phone: str) -> InboundTurn:
        with self._session_factory() as db:
            # --------------------------------------------------------
            # 1) Conversa + mensagem do cliente
            # --------------------------------------------------------
            try:
                conversation = get_conversation_by_phone(db, phone)
                if conversation is None:
                    customer = await self._resolve_name(message.sender, phone)
                    conversation = ensure_conversation(db, phone, customer)

                conversation_id = conversation.conversation_id
                append_message(db, conversation, "customer", message.body)

            except PersistenceFailure as e:
                logger.error(f"❌ [inbound] {phone}: mensagem do cliente não salva, turno abandonado: {e}")
                return InboundTurn(status="abandoned", phone=phone, error=str(e))

            # --------------------------------------------------------
            # 2) Resposta do bot
            # --------------------------------------------------------
            try:
                reply = await self._classify(message.body, phone)
            except Exception as e:
                logger.exception(f"❌ [inbound] {phone}: responder falhou")
                return InboundTurn(status="abandoned", phone=phone, conversation_id=conversation_id, error=str(e))

            try:
                append_message(db, conversation, "bot", reply)
            except PersistenceFailure as e:
                logger.error(f"❌ [inbound] {phone}: resposta não salva, não será enviada: {e}")
                return InboundTurn(status="abandoned", phone=phone, conversation_id=conversation_id, error=str(e))

        # --------------------------------------------------------
        # 3) Envio (só depois de salvo)
        # --------------------------------------------------------
        sent = await self._dispatcher.send_one(message.sender, reply)

        return InboundTurn(
            status="replied" if sent.success else "send_failed",
            phone=phone,
            conversation_id=conversation_id,
            reply=reply,
            error=sent.error,
        )

    async def _classify(self, text: str, phone: str) -> str:
        reply = self._responder(text, phone)
        if inspect.isawaitable(reply):
            reply = await reply
        if not reply:
            raise ValueError("responder devolveu resposta vazia")
        return reply

    async def _resolve_name(self, address: str, phone: str) -> str:
        try:
            contact = await self._sessions.active_network().get_contact_by_id(address)
        except Exception as e:
            logger.info(f"[inbound] nome do contato {phone} indisponível: {e}")
            return phone

        return contact.name or phone
