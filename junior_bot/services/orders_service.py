from sqlalchemy.orm import Session

from junior_bot.models.orders import Order


def list_orders(db: Session) -> list[Order]:
    return db.query(Order).order_by(Order.date.desc()).all()
