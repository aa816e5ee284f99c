from sqlalchemy import Column, String, Boolean, DateTime, Float, JSON
from datetime import datetime
import uuid
from junior_bot.db.base import Base

class Cart(Base):
    __tablename__ = "carts"

    cart_id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    customer = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)

    # [{"product": str, "price": float, "quantity": int}]
    items = Column(JSON, nullable=False, default=list)
    total = Column(Float, nullable=False)

    abandoned_at = Column(DateTime, default=datetime.now)
    recovered = Column(Boolean, nullable=False, default=False)
