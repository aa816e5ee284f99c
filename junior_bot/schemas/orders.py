from datetime import datetime
from typing import Literal

from pydantic import BaseModel

class OrderBase(BaseModel):
    customer: str
    product: str
    price: float
    status: Literal["Pendente", "Concluída", "Cancelada"] = "Pendente"

class OrderRead(OrderBase):
    order_id: str
    date: datetime | None = None

    class Config:
        from_attributes = True
