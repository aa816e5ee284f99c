# file: junior_bot/services/whatsapp_client.py

import asyncio
import logging
from typing import Any

import requests

from junior_bot.core.settings import settings
from junior_bot.schemas.whatsapp import ChatInfo, ContactInfo, CreatedGroup

logger = logging.getLogger("whatsapp_client")


class WhatsAppError(Exception):
    pass


class WhatsAppClient:
    """
    Cliente do bridge REST que roda o whatsapp-web.js.

    Implementa o contrato ChatNetwork. As chamadas HTTP são síncronas
    (requests) e rodam numa thread para não travar o event loop.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        session_id: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.WHATSAPP_BRIDGE_URL).rstrip("/")
        self.api_key = settings.WHATSAPP_BRIDGE_API_KEY if api_key is None else api_key
        self.session_id = session_id or settings.WHATSAPP_SESSION_ID
        self.timeout = timeout or settings.WHATSAPP_SEND_TIMEOUT
        self.session = requests.Session()

    # =========================================================================
    # 🔵 ENVIO GENÉRICO VIA JSON
    # =========================================================================
    def _post_json(self, endpoint: str, payload: dict | None = None) -> dict:
        url = f"{self.base_url}{endpoint}/{self.session_id}"

        logger.debug(f"[bridge] POST {url} payload={payload}")

        try:
            r = self.session.post(
                url,
                json=payload or {},
                headers={"x-api-key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"❌ [bridge] erro de rede em {endpoint}: {e}")
            raise WhatsAppError(str(e)) from e

        logger.debug(f"[bridge] status={r.status_code} body={r.text}")

        if r.status_code >= 400:
            raise WhatsAppError(f"HTTP {r.status_code}: {r.text}")

        try:
            data = r.json()
        except ValueError as e:
            raise WhatsAppError(f"resposta inválida do bridge: {r.text}") from e

        if isinstance(data, dict) and data.get("success") is False:
            raise WhatsAppError(data.get("error") or data.get("message") or "falha no bridge")

        return data

    # =========================================================================
    # 🔐 SESSÃO
    # =========================================================================
    async def start(self, credentials: dict[str, Any] | None) -> None:
        payload = {"credentials": credentials} if credentials else {}
        await asyncio.to_thread(self._post_json, "/session/start", payload)
        logger.info(f"[bridge] sessão {self.session_id} iniciada (credenciais={'sim' if credentials else 'não'})")

    async def logout(self) -> None:
        await asyncio.to_thread(self._post_json, "/session/logout")

    # =========================================================================
    # 📩 TEXTO
    # =========================================================================
    async def send_message(self, address: str, text: str) -> None:
        await asyncio.to_thread(self._post_json, "/client/sendMessage", {
            "chatId": address,
            "contentType": "string",
            "content": text,
        })

    # =========================================================================
    # 👤 CONTATOS / CHATS / GRUPOS
    # =========================================================================
    async def get_contact_by_id(self, address: str) -> ContactInfo:
        data = await asyncio.to_thread(self._post_json, "/client/getContactById", {
            "contactId": address,
        })
        contact = data.get("contact") or {}
        return ContactInfo(
            id=address,
            name=contact.get("name") or contact.get("pushname"),
        )

    async def get_chat_by_id(self, address: str) -> ChatInfo:
        data = await asyncio.to_thread(self._post_json, "/client/getChatById", {
            "chatId": address,
        })
        chat = data.get("chat") or {}
        metadata = chat.get("groupMetadata") or {}

        participants = []
        for p in metadata.get("participants") or chat.get("participants") or []:
            user = (p.get("id") or {}).get("user")
            if user:
                participants.append(user)

        return ChatInfo(
            id=(chat.get("id") or {}).get("_serialized") or address,
            name=chat.get("name"),
            is_group=bool(chat.get("isGroup")),
            participants=participants,
        )

    async def create_group(self, name: str, participants: list[str]) -> CreatedGroup:
        data = await asyncio.to_thread(self._post_json, "/client/createGroup", {
            "name": name,
            "participants": participants,
        })
        result = data.get("response") or data.get("result") or {}
        gid = (result.get("gid") or {}).get("_serialized")
        if not gid:
            raise WhatsAppError(f"grupo criado sem gid: {data}")
        return CreatedGroup(group_id=gid)
