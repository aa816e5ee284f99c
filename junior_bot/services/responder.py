# file: junior_bot/services/responder.py

import asyncio
import logging
from typing import Awaitable, Callable, Union

import aiohttp

from junior_bot.core.settings import settings

logger = logging.getLogger("responder")

# (texto, contato) -> resposta; pode ser síncrono ou assíncrono
Responder = Callable[[str, str], Union[str, Awaitable[str]]]


# ============================================================
# Regras por palavra-chave (ordem importa: a primeira vence)
# ============================================================

GREETING_REPLY = "Olá! Como posso ajudar você hoje?"
PRICE_REPLY = (
    "Temos vários produtos com diferentes preços. "
    "Poderia me dizer qual produto específico você está interessado?"
)
DELIVERY_REPLY = "Nosso prazo de entrega é de 3 a 5 dias úteis após a confirmação do pagamento."
PAYMENT_REPLY = "Aceitamos cartão de crédito, boleto bancário e PIX. Qual forma de pagamento você prefere?"
SIZE_REPLY = "Temos tamanhos P, M, G e GG disponíveis. Qual tamanho você precisa?"

DEFAULT_REPLY_TEMPLATE = 'Obrigado pelo seu contato. Como posso ajudar com sua dúvida sobre "{text}"?'

RULES: list[tuple[tuple[str, ...], str]] = [
    (("olá", "oi", "bom dia", "boa tarde"), GREETING_REPLY),
    (("preço", "valor", "custo"), PRICE_REPLY),
    (("entrega", "prazo"), DELIVERY_REPLY),
    (("pagamento", "pagar"), PAYMENT_REPLY),
    (("tamanho", "medida"), SIZE_REPLY),
]


def classify(text: str, rules=RULES) -> str:
    lowered = text.lower()

    for triggers, reply in rules:
        if any(trigger in lowered for trigger in triggers):
            return reply

    return DEFAULT_REPLY_TEMPLATE.format(text=text)


class KeywordResponder:
    def __init__(self, rules=RULES):
        self.rules = rules

    def __call__(self, text: str, contact_id: str) -> str:
        return classify(text, self.rules)


# ============================================================
# Classificador remoto (opcional)
# ============================================================

class RemoteResponder:
    """
    Pede a resposta a um serviço de intenção externo.
    Qualquer falha cai nas regras por palavra-chave.
    """

    def __init__(self, url: str, timeout: float | None = None, fallback: KeywordResponder | None = None):
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout or settings.NLU_TIMEOUT)
        self.fallback = fallback or KeywordResponder()

    async def _request(self, text: str, contact_id: str) -> str | None:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(self.url, json={"text": text, "contact": contact_id}) as resp:
                if resp.status != 200:
                    logger.warning(f"⚠️ [NLU] status={resp.status}")
                    return None
                data = await resp.json()
                return (data or {}).get("reply")

    async def __call__(self, text: str, contact_id: str) -> str:
        try:
            reply = await self._request(text, contact_id)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"❌ [NLU] erro consultando classificador: {e}")
            reply = None

        if reply:
            return reply

        return self.fallback(text, contact_id)


def build_responder() -> Responder:
    if settings.NLU_URL:
        logger.info(f"[responder] usando classificador remoto {settings.NLU_URL}")
        return RemoteResponder(settings.NLU_URL)
    return KeywordResponder()
