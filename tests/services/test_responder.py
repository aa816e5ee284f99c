import aiohttp
import pytest

from junior_bot.services.responder import (
    DELIVERY_REPLY,
    GREETING_REPLY,
    PAYMENT_REPLY,
    PRICE_REPLY,
    SIZE_REPLY,
    KeywordResponder,
    RemoteResponder,
    classify,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Bom dia!", GREETING_REPLY),
        ("BOA TARDE", GREETING_REPLY),
        ("Qual o preço?", PRICE_REPLY),
        ("Qual o prazo?", DELIVERY_REPLY),
        ("Posso pagar no PIX?", PAYMENT_REPLY),
        ("Tem tamanho GG?", SIZE_REPLY),
    ],
)
def test_classify_rules(text, expected):
    assert classify(text) == expected


def test_first_matching_rule_wins():
    # saudação vem antes de preço
    assert classify("Olá, qual o valor?") == GREETING_REPLY


def test_fallback_echoes_customer_text():
    reply = classify("Vocês abrem sábado?")
    assert "Vocês abrem sábado?" in reply
    assert reply.startswith("Obrigado pelo seu contato")


def test_keyword_responder_contract():
    responder = KeywordResponder()
    assert responder("bom dia", "5511999999999") == GREETING_REPLY


@pytest.mark.asyncio
async def test_remote_responder_uses_remote_reply(monkeypatch):
    responder = RemoteResponder("http://nlu.local/reply")

    async def fake_request(text, contact_id):
        return f"remoto: {text}"

    monkeypatch.setattr(responder, "_request", fake_request)

    assert await responder("oi", "5511") == "remoto: oi"


@pytest.mark.asyncio
async def test_remote_responder_falls_back_to_keywords(monkeypatch):
    responder = RemoteResponder("http://nlu.local/reply")

    async def failing_request(text, contact_id):
        raise aiohttp.ClientConnectionError("sem rede")

    monkeypatch.setattr(responder, "_request", failing_request)

    assert await responder("qual o prazo de entrega?", "5511") == DELIVERY_REPLY


@pytest.mark.asyncio
async def test_remote_responder_falls_back_on_empty_reply(monkeypatch):
    responder = RemoteResponder("http://nlu.local/reply")

    async def empty_request(text, contact_id):
        return None

    monkeypatch.setattr(responder, "_request", empty_request)

    assert await responder("bom dia", "5511") == GREETING_REPLY
