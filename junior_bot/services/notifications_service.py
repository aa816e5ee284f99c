# file: junior_bot/services/notifications_service.py

"""
Mensagens disparadas pelo dashboard (resposta manual, recuperação de
carrinho, boas-vindas de lead). O registro principal já foi salvo
antes; aqui a falha de envio vira só um aviso no resultado.
"""

import logging

from junior_bot.schemas.whatsapp import SendResult
from junior_bot.services.outbound_service import OutboundDispatcher

logger = logging.getLogger("notifications_service")

LEAD_WELCOME_TEMPLATE = "Olá {name}! Obrigado por entrar em contato. Como posso ajudar você hoje?"

CART_RECOVERY_TEMPLATE = (
    "Olá {customer}! Notamos que você deixou alguns itens no carrinho. "
    "Que tal finalizar sua compra? Seu carrinho está esperando por você!"
)


def lead_welcome_message(name: str) -> str:
    return LEAD_WELCOME_TEMPLATE.format(name=name)


def cart_recovery_message(customer: str) -> str:
    return CART_RECOVERY_TEMPLATE.format(customer=customer)


async def notify(dispatcher: OutboundDispatcher, phone: str, text: str, reason: str) -> SendResult:
    result = await dispatcher.send_one(phone, text)

    if not result.success:
        logger.warning(f"⚠️ [{reason}] notificação para {phone} não enviada: {result.error}")

    return result
