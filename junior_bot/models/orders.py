from sqlalchemy import Column, String, DateTime, Float
from datetime import datetime
import uuid
from junior_bot.db.base import Base

class Order(Base):
    __tablename__ = "orders"

    order_id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    customer = Column(String, nullable=False)
    product = Column(String, nullable=False)
    price = Column(Float, nullable=False)

    date = Column(DateTime, default=datetime.now)
    status = Column(String, nullable=False, default="Pendente")  # Pendente/Concluída/Cancelada
