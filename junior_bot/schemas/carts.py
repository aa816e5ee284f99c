from datetime import datetime

from pydantic import BaseModel

from junior_bot.schemas.whatsapp import SendResult


class CartItem(BaseModel):
    product: str
    price: float
    quantity: int


class CartBase(BaseModel):
    customer: str
    email: str
    phone: str
    items: list[CartItem] = []
    total: float


class CartRead(CartBase):
    cart_id: str
    abandoned_at: datetime | None = None
    recovered: bool = False

    class Config:
        from_attributes = True


class AbandonedCartRead(CartRead):
    days_abandoned: int


class CartRecoverResponse(CartRead):
    notification: SendResult | None = None
