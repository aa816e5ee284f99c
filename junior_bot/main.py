import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from junior_bot.api.v1 import api_router
from junior_bot.core.errors import SessionError
from junior_bot.core.redis import close_redis
from junior_bot.core.settings import settings
from junior_bot.db import models_registry  # noqa: F401
from junior_bot.db.base import Base
from junior_bot.db.session import engine
from junior_bot.services.gateway import build_gateway

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)

    gateway = build_gateway()
    app.state.gateway = gateway

    if settings.WHATSAPP_AUTOSTART:
        try:
            await gateway.sessions.initialize()
        except SessionError as e:
            logger.error(f"❌ WhatsApp não iniciado: {e}")

    yield

    await gateway.sessions.shutdown()
    await close_redis()


app = FastAPI(title="Junior Bot API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")

@app.get("/health")
def health():
    return {"status": "ok"}
