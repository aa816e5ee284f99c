# file: junior_bot/db/session.py

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from junior_bot.core.settings import settings


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}

    # sqlite local: garante a pasta do arquivo
    db_path = url.split("///", 1)[-1] if "///" in url else ""
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return {"connect_args": {"check_same_thread": False}}


engine = create_engine(settings.DATABASE_URL, future=True, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
