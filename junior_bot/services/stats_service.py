from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from junior_bot.models.conversations import Conversation, Message
from junior_bot.models.orders import Order
from junior_bot.schemas.stats import ProductSold, StatsRead
from junior_bot.services.carts_service import count_recovered

GROWTH_WINDOW_DAYS = 30
TOP_PRODUCTS = 5


def _response_time_avg(db: Session) -> float:
    """
    Média (segundos) entre cada mensagem do cliente e a resposta
    seguinte do bot na mesma conversa.
    """
    rows = (
        db.query(Message.conversation_id, Message.sender, Message.timestamp)
        .order_by(Message.conversation_id, Message.seq)
        .all()
    )

    deltas = []
    pending: dict[str, datetime] = {}
    for conversation_id, sender, timestamp in rows:
        if sender == "customer":
            pending.setdefault(conversation_id, timestamp)
        elif conversation_id in pending:
            deltas.append((timestamp - pending.pop(conversation_id)).total_seconds())

    if not deltas:
        return 0.0
    return round(sum(deltas) / len(deltas), 1)


def _revenue_growth(orders: list[Order], now: datetime) -> float:
    current_start = now - timedelta(days=GROWTH_WINDOW_DAYS)
    previous_start = current_start - timedelta(days=GROWTH_WINDOW_DAYS)

    current = sum(o.price for o in orders if o.date and o.date >= current_start)
    previous = sum(o.price for o in orders if o.date and previous_start <= o.date < current_start)

    if not previous:
        return 0.0
    return round((current - previous) / previous * 100, 1)


def _products_sold(orders: list[Order]) -> list[ProductSold]:
    counts: dict[str, int] = {}
    totals: dict[str, float] = {}

    for order in orders:
        counts[order.product] = counts.get(order.product, 0) + 1
        totals[order.product] = totals.get(order.product, 0.0) + order.price

    ranked = sorted(counts, key=lambda p: counts[p], reverse=True)[:TOP_PRODUCTS]
    return [ProductSold(product=p, quantity=counts[p], total=totals[p]) for p in ranked]


def get_stats(db: Session, now: datetime | None = None) -> StatsRead:
    now = now or datetime.now()

    total_conversations = db.query(Conversation).count()
    orders = db.query(Order).all()
    total_orders = len(orders)

    conversion_rate = 0.0
    if total_orders and total_conversations:
        conversion_rate = round(total_orders / total_conversations * 100, 1)

    return StatsRead(
        total_conversations=total_conversations,
        total_sales=total_orders,
        cart_recovery=count_recovered(db),
        response_time_avg=_response_time_avg(db),
        conversion_rate=conversion_rate,
        total_revenue=sum(o.price for o in orders),
        revenue_growth=_revenue_growth(orders, now),
        products_sold=_products_sold(orders),
    )
