# file: junior_bot/db/seed/seed.py

from sqlalchemy.orm import Session
from sqlalchemy import select
from datetime import datetime, timedelta

from junior_bot.db import models_registry  # noqa: F401
from junior_bot.db.base import Base
from junior_bot.db.session import engine as default_engine
from junior_bot.models.carts import Cart
from junior_bot.models.orders import Order


def _demo_carts(now: datetime) -> list[dict]:
    return [
        {
            "customer": "Maria Silva",
            "email": "maria@example.com",
            "phone": "5511987654321",
            "items": [
                {"product": "Camiseta Básica", "price": 49.9, "quantity": 2},
            ],
            "total": 99.8,
            "abandoned_at": now - timedelta(days=2),
        },
        {
            "customer": "João Souza",
            "email": "joao@example.com",
            "phone": "5521912345678",
            "items": [
                {"product": "Calça Jeans", "price": 129.9, "quantity": 1},
                {"product": "Cinto de Couro", "price": 59.9, "quantity": 1},
            ],
            "total": 189.8,
            "abandoned_at": now - timedelta(days=5),
        },
    ]


def _demo_orders(now: datetime) -> list[dict]:
    return [
        {"customer": "Ana Costa", "product": "Camiseta Básica", "price": 49.9, "status": "Concluída", "date": now - timedelta(days=3)},
        {"customer": "Pedro Lima", "product": "Calça Jeans", "price": 129.9, "status": "Pendente", "date": now - timedelta(days=1)},
        {"customer": "Carla Dias", "product": "Camiseta Básica", "price": 49.9, "status": "Concluída", "date": now - timedelta(days=40)},
    ]


def run_seed(engine=default_engine):
    print("🔧 Iniciando seed...")

    now = datetime.now()
    Base.metadata.create_all(bind=engine)

    with Session(engine) as db:
        for c in _demo_carts(now):
            exists = db.scalars(
                select(Cart).where(Cart.email == c["email"])
            ).first()

            if exists:
                print(f"⚠️ Carrinho de {c['customer']} já existe, pulando...")
                continue

            db.add(Cart(**c))

        if db.scalars(select(Order)).first() is None:
            for o in _demo_orders(now):
                db.add(Order(**o))
        else:
            print("⚠️ Pedidos já existem, pulando...")

        db.commit()

    print("🎉 Seed concluído com sucesso!")


if __name__ == "__main__":
    run_seed()
