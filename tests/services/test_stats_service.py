from datetime import datetime, timedelta

from junior_bot.models.carts import Cart
from junior_bot.models.conversations import Message
from junior_bot.models.orders import Order
from junior_bot.services.conversations_service import ensure_conversation
from junior_bot.services.stats_service import get_stats

NOW = datetime(2024, 6, 30, 12, 0, 0)


def test_empty_database(db):
    stats = get_stats(db, now=NOW)

    assert stats.total_conversations == 0
    assert stats.total_sales == 0
    assert stats.conversion_rate == 0.0
    assert stats.response_time_avg == 0.0
    assert stats.revenue_growth == 0.0
    assert stats.products_sold == []


def test_stats_aggregation(db):
    conv = ensure_conversation(db, "5511999999999", "Maria")
    ensure_conversation(db, "5522222222222", "João")

    db.add_all([
        Message(conversation_id=conv.conversation_id, sender="customer", text="oi", timestamp=NOW),
        Message(conversation_id=conv.conversation_id, sender="bot", text="olá", timestamp=NOW + timedelta(seconds=4)),
        Message(conversation_id=conv.conversation_id, sender="customer", text="preço?", timestamp=NOW + timedelta(seconds=10)),
        Message(conversation_id=conv.conversation_id, sender="bot", text="depende", timestamp=NOW + timedelta(seconds=12)),
        Order(customer="Ana", product="Camiseta", price=100.0, date=NOW - timedelta(days=5)),
        Order(customer="Pedro", product="Camiseta", price=50.0, date=NOW - timedelta(days=10)),
        Order(customer="Carla", product="Calça", price=100.0, date=NOW - timedelta(days=45)),
        Cart(customer="Maria", email="maria@example.com", phone="5511999999999", items=[], total=10.0, abandoned_at=NOW, recovered=True),
    ])
    db.commit()

    stats = get_stats(db, now=NOW)

    assert stats.total_conversations == 2
    assert stats.total_sales == 3
    assert stats.conversion_rate == 150.0
    assert stats.total_revenue == 250.0
    assert stats.cart_recovery == 1
    assert stats.response_time_avg == 3.0
    assert stats.revenue_growth == 50.0
    assert stats.products_sold[0].product == "Camiseta"
    assert stats.products_sold[0].quantity == 2
