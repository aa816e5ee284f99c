# file: junior_bot/api/v1/carts.py

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from junior_bot.db.session import get_db
from junior_bot.schemas.carts import AbandonedCartRead, CartRead, CartRecoverResponse
from junior_bot.services.carts_service import days_abandoned, get_cart, list_abandoned_carts, mark_recovered
from junior_bot.services.gateway import Gateway, get_gateway
from junior_bot.services.notifications_service import cart_recovery_message, notify

router = APIRouter()
logger = logging.getLogger("carts_api")


@router.get("/abandoned", response_model=list[AbandonedCartRead])
def get_abandoned_carts(db: Session = Depends(get_db)):
    return [
        AbandonedCartRead(
            **CartRead.model_validate(cart).model_dump(),
            days_abandoned=days_abandoned(cart),
        )
        for cart in list_abandoned_carts(db)
    ]


@router.post("/recover/{cart_id}", response_model=CartRecoverResponse)
async def recover_cart(
    cart_id: str,
    db: Session = Depends(get_db),
    gateway: Gateway = Depends(get_gateway),
):
    cart = get_cart(db, cart_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Carrinho não encontrado")

    cart = mark_recovered(db, cart)

    notification = await notify(
        gateway.dispatcher,
        cart.phone,
        cart_recovery_message(cart.customer),
        "cart_recovery",
    )

    logger.info(f"[cart] carrinho {cart_id} recuperado, enviado={notification.success}")

    return CartRecoverResponse(
        **CartRead.model_validate(cart).model_dump(),
        notification=notification,
    )
