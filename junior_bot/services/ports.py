from typing import Any, Protocol

from junior_bot.schemas.whatsapp import ChatInfo, ContactInfo, CreatedGroup


class ChatNetwork(Protocol):
    """Contrato mínimo da conexão com a rede WhatsApp."""

    async def start(self, credentials: dict[str, Any] | None) -> None: ...
    async def logout(self) -> None: ...

    async def send_message(self, address: str, text: str) -> None: ...
    async def get_contact_by_id(self, address: str) -> ContactInfo: ...
    async def get_chat_by_id(self, address: str) -> ChatInfo: ...
    async def create_group(self, name: str, participants: list[str]) -> CreatedGroup: ...
