import pytest

from junior_bot.schemas.whatsapp import ChatInfo

GROUP = "120363025246125888@g.us"


@pytest.mark.asyncio
async def test_extract_group_numbers(gateway, network, bring_online):
    await bring_online(gateway.sessions)
    network.chats[GROUP] = ChatInfo(
        id=GROUP,
        name="Clientes VIP",
        is_group=True,
        participants=["5511111111111", "5522222222222", "5511111111111"],
    )

    result = await gateway.groups.extract_group_numbers("120363025246125888")

    assert result.success
    assert result.group_name == "Clientes VIP"
    assert result.numbers == ["5511111111111", "5522222222222"]
    assert result.participant_count == 2


@pytest.mark.asyncio
async def test_extract_from_individual_chat_fails(gateway, network, bring_online):
    await bring_online(gateway.sessions)
    network.chats[GROUP] = ChatInfo(id=GROUP, name="Maria", is_group=False)

    result = await gateway.groups.extract_group_numbers(GROUP)

    assert result.success is False
    assert result.reason == "not_a_group"
    assert result.error == "ID fornecido não é de um grupo"
    assert result.numbers == []
    assert network.created_groups == []


@pytest.mark.asyncio
async def test_extract_when_not_ready(gateway):
    result = await gateway.groups.extract_group_numbers(GROUP)

    assert result.success is False
    assert result.reason == "not_ready"


@pytest.mark.asyncio
async def test_extract_unknown_group(gateway, bring_online):
    await bring_online(gateway.sessions)

    result = await gateway.groups.extract_group_numbers(GROUP)

    assert result.reason == "unreachable"


@pytest.mark.asyncio
async def test_extract_invalid_id(gateway, bring_online):
    await bring_online(gateway.sessions)

    result = await gateway.groups.extract_group_numbers("5511999999999@c.us")

    assert result.reason == "invalid_target"


@pytest.mark.asyncio
async def test_create_group_normalizes_participants(gateway, network, bring_online):
    await bring_online(gateway.sessions)

    result = await gateway.groups.create_group("Promo", ["5511111111111", "+55 11 11111-1111", "5522222222222"])

    assert result.success
    assert result.group_id == "120363000000000001@g.us"
    assert result.participant_count == 2
    assert network.created_groups == [("Promo", ["5511111111111@c.us", "5522222222222@c.us"])]


@pytest.mark.asyncio
async def test_create_group_network_failure(gateway, network, bring_online):
    await bring_online(gateway.sessions)
    network.create_group_error = RuntimeError("participantes inválidos")

    result = await gateway.groups.create_group("Promo", ["5511111111111"])

    assert result.success is False
    assert result.reason == "unreachable"
    assert result.error == "participantes inválidos"
    assert result.group_id is None


@pytest.mark.asyncio
async def test_create_group_when_not_ready(gateway, network):
    result = await gateway.groups.create_group("Promo", ["5511111111111"])

    assert result.success is False
    assert result.reason == "not_ready"
    assert network.created_groups == []


@pytest.mark.asyncio
async def test_create_group_invalid_participant(gateway, network, bring_online):
    await bring_online(gateway.sessions)

    result = await gateway.groups.create_group("Promo", ["5511111111111", "sem número"])

    assert result.success is False
    assert result.reason == "invalid_target"
    assert network.created_groups == []
