from fastapi import APIRouter

# Webhooks
from .webhooks_whatsapp import router as webhooks_whatsapp_router

# WhatsApp
from .session import router as session_router
from .whatsapp import router as whatsapp_router

# Dashboard
from .conversations import router as conversations_router
from .carts import router as carts_router
from .orders import router as orders_router
from .stats import router as stats_router
from .leads import router as leads_router

api_router = APIRouter()

# ========== Webhooks ============================
api_router.include_router(webhooks_whatsapp_router, prefix="/webhooks/whatsapp", tags=["webhooks"])

# ========== WhatsApp ============================
api_router.include_router(session_router, prefix="/session", tags=["session"])
api_router.include_router(whatsapp_router, prefix="/whatsapp", tags=["whatsapp"])

# ========== Dashboard ===========================
api_router.include_router(conversations_router, prefix="/conversations", tags=["conversations"])
api_router.include_router(carts_router, prefix="/carts", tags=["carts"])
api_router.include_router(orders_router, prefix="/orders", tags=["orders"])
api_router.include_router(stats_router, prefix="/stats", tags=["stats"])
api_router.include_router(leads_router, prefix="/leads", tags=["leads"])
