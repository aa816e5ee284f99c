import logging
import uuid
from typing import Optional

from pydantic import ValidationError

from junior_bot.core.redis import cache_get, cache_set, cache_delete
from junior_bot.core.settings import settings
from junior_bot.schemas.whatsapp import BulkSendResult

logger = logging.getLogger("bulk_jobs_cache")


def _redis_key(job_id: str) -> str:
    return f"bulk_job:{job_id}"


def new_job_id() -> str:
    return f"bulk_{uuid.uuid4().hex}"


# ============================================================
# Public API
# ============================================================

async def save_bulk_job(result: BulkSendResult):
    """
    Grava o snapshot parcial/final do envio em massa com TTL.
    """
    await cache_set(
        key=_redis_key(result.job_id),
        value=result.model_dump_json(),
        ttl_seconds=settings.BULK_JOB_TTL_SECONDS,
    )


async def get_bulk_job(job_id: str) -> Optional[BulkSendResult]:
    key = _redis_key(job_id)
    raw = await cache_get(key)

    if not raw:
        return None

    try:
        return BulkSendResult.model_validate_json(raw)
    except ValidationError:
        # snapshot corrompido: remove a chave
        logger.warning(f"⚠️ [bulk] snapshot inválido para {job_id}, removendo")
        await cache_delete(key)
        return None
