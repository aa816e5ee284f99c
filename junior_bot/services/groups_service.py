# file: junior_bot/services/groups_service.py

import asyncio
import logging

from junior_bot.core.errors import InvalidTarget, NotReady
from junior_bot.core.settings import settings
from junior_bot.schemas.whatsapp import GroupCreateResult, GroupRosterResult
from junior_bot.services.session_manager import SessionManager
from junior_bot.utils.addresses import to_contact_address, to_group_address

logger = logging.getLogger("groups_service")


class GroupService:
    def __init__(self, sessions: SessionManager, timeout: float | None = None):
        self._sessions = sessions
        self.timeout = timeout or settings.WHATSAPP_SEND_TIMEOUT

    async def extract_group_numbers(self, group_id: str) -> GroupRosterResult:
        try:
            network = self._sessions.active_network()
        except NotReady as e:
            logger.warning("⚠️ Cliente WhatsApp não está pronto. Extração de números não realizada.")
            return GroupRosterResult(success=False, reason="not_ready", error=str(e))

        try:
            address = to_group_address(group_id)
        except InvalidTarget as e:
            return GroupRosterResult(success=False, reason="invalid_target", error=str(e))

        try:
            chat = await asyncio.wait_for(network.get_chat_by_id(address), self.timeout)
        except Exception as e:
            logger.error(f"❌ Erro ao extrair números do grupo {address}: {e}")
            return GroupRosterResult(success=False, reason="unreachable", error=str(e) or e.__class__.__name__)

        if not chat.is_group:
            return GroupRosterResult(
                success=False,
                reason="not_a_group",
                error="ID fornecido não é de um grupo",
            )

        # únicos, mantendo a ordem da rede
        numbers = list(dict.fromkeys(chat.participants))

        logger.info(f"[groups] {address} '{chat.name}' participantes={len(numbers)}")

        return GroupRosterResult(
            success=True,
            group_name=chat.name,
            participant_count=len(numbers),
            numbers=numbers,
        )

    async def create_group(self, name: str, participants: list[str]) -> GroupCreateResult:
        try:
            network = self._sessions.active_network()
        except NotReady as e:
            logger.warning("⚠️ Cliente WhatsApp não está pronto. Criação de grupo não realizada.")
            return GroupCreateResult(success=False, reason="not_ready", error=str(e))

        try:
            addresses = list(dict.fromkeys(to_contact_address(p) for p in participants))
        except InvalidTarget as e:
            return GroupCreateResult(success=False, reason="invalid_target", error=str(e))

        try:
            created = await asyncio.wait_for(network.create_group(name, addresses), self.timeout)
        except Exception as e:
            logger.error(f"❌ Erro ao criar grupo '{name}': {e}")
            return GroupCreateResult(success=False, reason="unreachable", error=str(e) or e.__class__.__name__)

        logger.info(f"[groups] grupo criado {created.group_id} membros={len(addresses)}")

        return GroupCreateResult(
            success=True,
            group_id=created.group_id,
            group_name=name,
            participant_count=len(addresses),
        )
