# file: junior_bot/api/v1/orders.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from junior_bot.db.session import get_db
from junior_bot.schemas.orders import OrderRead
from junior_bot.services.orders_service import list_orders

router = APIRouter()


@router.get("", response_model=list[OrderRead])
def get_orders(db: Session = Depends(get_db)):
    return list_orders(db)
