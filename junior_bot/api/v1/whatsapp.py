# file: junior_bot/api/v1/whatsapp.py

import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from junior_bot.core.errors import InvalidTarget, NotReady, SendFailure
from junior_bot.schemas.whatsapp import (
    BulkJobAccepted,
    BulkSendRequest,
    BulkSendResult,
    GroupCreateRequest,
    GroupCreateResult,
    GroupExtractRequest,
    GroupRosterResult,
    SendRequest,
    SendResult,
)
from junior_bot.services.bulk_jobs_cache import get_bulk_job, new_job_id, save_bulk_job
from junior_bot.services.gateway import Gateway, get_gateway
from junior_bot.services.outbound_service import CancellationToken

router = APIRouter()
logger = logging.getLogger("whatsapp_api")


# ============================================================
# 📩 ENVIO AVULSO
# ============================================================

@router.post("/send", response_model=SendResult)
async def send_message(payload: SendRequest, gateway: Gateway = Depends(get_gateway)):
    try:
        address = await gateway.dispatcher.deliver(payload.number, payload.message)
    except NotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except InvalidTarget as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SendFailure as e:
        raise HTTPException(status_code=502, detail=str(e))

    return SendResult(success=True, recipient=payload.number, address=address)


# ============================================================
# 📣 ENVIO EM MASSA
# ============================================================

async def run_bulk_job(gateway: Gateway, job_id: str, payload: BulkSendRequest):
    token = gateway.bulk_jobs[job_id]
    try:
        await gateway.dispatcher.send_bulk(
            payload.numbers,
            payload.message,
            inter_message_delay=payload.delay_ms,
            cancel_token=token,
            on_progress=save_bulk_job,
            job_id=job_id,
        )
    finally:
        gateway.bulk_jobs.pop(job_id, None)


@router.post("/bulk", responses={202: {"model": BulkJobAccepted}, 200: {"model": BulkSendResult}})
async def send_bulk(
    payload: BulkSendRequest,
    background: BackgroundTasks,
    gateway: Gateway = Depends(get_gateway),
):
    # sem sessão pronta: resposta imediata, todos falham, nada é enviado
    if not gateway.sessions.ready:
        result = await gateway.dispatcher.send_bulk(payload.numbers, payload.message)
        return JSONResponse(status_code=status.HTTP_200_OK, content=result.model_dump(mode="json"))

    job_id = new_job_id()
    gateway.bulk_jobs[job_id] = CancellationToken()
    background.add_task(run_bulk_job, gateway, job_id, payload)

    logger.info(f"[bulk] job {job_id} aceito ({len(payload.numbers)} destinatários)")

    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content=BulkJobAccepted(job_id=job_id, requested=len(payload.numbers)).model_dump(),
    )


@router.get("/bulk/{job_id}", response_model=BulkSendResult)
async def get_bulk_status(job_id: str):
    try:
        result = await get_bulk_job(job_id)
    except RedisError as e:
        logger.error(f"❌ [bulk] cache indisponível: {e}")
        raise HTTPException(status_code=503, detail="cache de jobs indisponível")

    if result is None:
        raise HTTPException(status_code=404, detail="Job não encontrado")
    return result


@router.post("/bulk/{job_id}/cancel")
async def cancel_bulk(job_id: str, gateway: Gateway = Depends(get_gateway)):
    token = gateway.bulk_jobs.get(job_id)
    if token is None:
        raise HTTPException(status_code=404, detail="Job não encontrado ou já finalizado")

    token.cancel()
    logger.info(f"[bulk] cancelamento solicitado para {job_id}")
    return {"job_id": job_id, "status": "cancelling"}


# ============================================================
# 👥 GRUPOS
# ============================================================

@router.post("/groups/extract", response_model=GroupRosterResult)
async def extract_group_numbers(payload: GroupExtractRequest, gateway: Gateway = Depends(get_gateway)):
    return await gateway.groups.extract_group_numbers(payload.group_id)


@router.post("/groups", response_model=GroupCreateResult)
async def create_group(payload: GroupCreateRequest, gateway: Gateway = Depends(get_gateway)):
    return await gateway.groups.create_group(payload.name, payload.participants)
