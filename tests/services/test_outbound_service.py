import asyncio
import time

import pytest

from junior_bot.core.errors import InvalidTarget, NotReady, SendFailure
from junior_bot.services.outbound_service import CancellationToken


@pytest.mark.asyncio
async def test_deliver_normalizes_address(gateway, network, bring_online):
    await bring_online(gateway.sessions)

    address = await gateway.dispatcher.deliver("+55 11 99999-9999", "oi")

    assert address == "5511999999999@c.us"
    assert network.sent == [("5511999999999@c.us", "oi")]


@pytest.mark.asyncio
async def test_deliver_requires_ready_session(gateway, network):
    with pytest.raises(NotReady):
        await gateway.dispatcher.deliver("5511999999999", "oi")
    assert network.sent == []


@pytest.mark.asyncio
async def test_deliver_rejects_invalid_number(gateway, bring_online):
    await bring_online(gateway.sessions)

    with pytest.raises(InvalidTarget):
        await gateway.dispatcher.deliver("sem número", "oi")


@pytest.mark.asyncio
async def test_deliver_wraps_network_errors(gateway, network, bring_online):
    await bring_online(gateway.sessions)
    network.fail_for.add("5511999999999@c.us")

    with pytest.raises(SendFailure) as exc:
        await gateway.dispatcher.deliver("5511999999999", "oi")

    assert exc.value.address == "5511999999999@c.us"
    assert "número bloqueado" in str(exc.value)


@pytest.mark.asyncio
async def test_deliver_times_out(gateway, network, bring_online):
    await bring_online(gateway.sessions)
    gateway.dispatcher.send_timeout = 0.01
    network.send_delay = 0.2

    with pytest.raises(SendFailure) as exc:
        await gateway.dispatcher.deliver("5511999999999", "oi")

    assert "timeout" in str(exc.value)


@pytest.mark.asyncio
async def test_send_one_returns_result_instead_of_raising(gateway):
    result = await gateway.dispatcher.send_one("5511999999999", "oi")

    assert result.success is False
    assert result.error == "Cliente WhatsApp não está pronto"


@pytest.mark.asyncio
async def test_bulk_not_ready_fails_everyone(gateway, network):
    result = await gateway.dispatcher.send_bulk(["111", "222"], "promo")

    assert result.status == "not_ready"
    assert (result.sent, result.failed) == (0, 2)
    assert [d.number for d in result.details] == ["111", "222"]
    assert network.sent == []


@pytest.mark.asyncio
async def test_bulk_failure_does_not_stop_batch(gateway, network, bring_online):
    await bring_online(gateway.sessions)
    network.fail_for.add("222@c.us")

    result = await gateway.dispatcher.send_bulk(["111", "222", "333"], "promo")

    assert result.status == "completed"
    assert (result.sent, result.failed) == (2, 1)
    assert [d.status for d in result.details] == ["sent", "failed", "sent"]
    assert [a for a, _ in network.sent] == ["111@c.us", "333@c.us"]


@pytest.mark.asyncio
async def test_bulk_is_sequential_with_delay(gateway, network, bring_online):
    await bring_online(gateway.sessions)

    stamps = []
    real_send = network.send_message

    async def timed_send(address, text):
        stamps.append(time.monotonic())
        await real_send(address, text)

    network.send_message = timed_send

    result = await gateway.dispatcher.send_bulk(["111", "222", "333"], "promo", inter_message_delay=50)

    assert result.sent == 3
    gaps = [b - a for a, b in zip(stamps, stamps[1:])]
    assert all(gap >= 0.045 for gap in gaps)


@pytest.mark.asyncio
async def test_bulk_cancel_marks_remaining_as_failed(gateway, network, bring_online):
    await bring_online(gateway.sessions)
    token = CancellationToken()

    def cancel_after_first(snapshot):
        if snapshot.sent == 1:
            token.cancel()

    result = await gateway.dispatcher.send_bulk(
        ["111", "222", "333"],
        "promo",
        inter_message_delay=5000,
        cancel_token=token,
        on_progress=cancel_after_first,
    )

    assert result.status == "cancelled"
    assert (result.sent, result.failed) == (1, 2)
    assert result.sent + result.failed == result.requested
    assert {d.error for d in result.details if d.status == "failed"} == {"cancelado"}
    assert len(network.sent) == 1


@pytest.mark.asyncio
async def test_bulk_progress_errors_are_swallowed(gateway, bring_online):
    await bring_online(gateway.sessions)
    snapshots = []

    async def flaky_progress(snapshot):
        snapshots.append(snapshot.sent)
        raise RuntimeError("redis caiu")

    result = await gateway.dispatcher.send_bulk(["111", "222"], "promo", on_progress=flaky_progress)

    assert result.status == "completed"
    assert result.sent == 2
    # inicial + um por destinatário + final
    assert snapshots == [0, 1, 2, 2]


@pytest.mark.asyncio
async def test_cancellation_token_wakes_pause_early():
    token = CancellationToken()
    asyncio.get_running_loop().call_later(0.01, token.cancel)

    started = time.monotonic()
    assert await token.wait(5) is True
    assert time.monotonic() - started < 1


@pytest.mark.asyncio
async def test_send_one_refuses_group_address(gateway, network, bring_online):
    await bring_online(gateway.sessions)

    result = await gateway.dispatcher.send_one("5511999999999-1600000000@g.us", "oi")

    assert result.success is False
    assert result.address is None
    assert network.sent == []


@pytest.mark.asyncio
async def test_bulk_counts_group_address_as_failure(gateway, network, bring_online):
    await bring_online(gateway.sessions)

    result = await gateway.dispatcher.send_bulk(["111", "120363025246125888@g.us"], "promo")

    assert (result.sent, result.failed) == (1, 1)
    assert network.sent == [("111@c.us", "promo")]
