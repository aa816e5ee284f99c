from datetime import datetime

from sqlalchemy.orm import Session

from junior_bot.models.carts import Cart


def get_cart(db: Session, cart_id: str) -> Cart | None:
    return db.get(Cart, cart_id)


def list_abandoned_carts(db: Session) -> list[Cart]:
    return (
        db.query(Cart)
        .filter(Cart.recovered.is_(False))
        .order_by(Cart.abandoned_at.desc())
        .all()
    )


def days_abandoned(cart: Cart, now: datetime | None = None) -> int:
    if not cart.abandoned_at:
        return 0
    now = now or datetime.now()
    return max((now - cart.abandoned_at).days, 0)


def mark_recovered(db: Session, cart: Cart) -> Cart:
    cart.recovered = True
    db.commit()
    db.refresh(cart)
    return cart


def count_recovered(db: Session) -> int:
    return db.query(Cart).filter(Cart.recovered.is_(True)).count()
