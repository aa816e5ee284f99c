# file: junior_bot/services/outbound_service.py

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Union

from junior_bot.core.errors import GatewayError, SendFailure
from junior_bot.core.settings import settings
from junior_bot.schemas.whatsapp import BulkSendResult, SendResult
from junior_bot.services.session_manager import SessionManager
from junior_bot.utils.addresses import to_contact_address

logger = logging.getLogger("outbound_service")

ProgressCallback = Callable[[BulkSendResult], Union[None, Awaitable[None]]]


class CancellationToken:
    """Sinal para abortar um envio em massa entre um destinatário e outro."""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        self._event.set()

    async def wait(self, timeout: float) -> bool:
        """Espera até `timeout` segundos; retorna True se foi cancelado antes."""
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            pass
        return self.cancelled


class OutboundDispatcher:
    def __init__(
        self,
        sessions: SessionManager,
        send_timeout: float | None = None,
        default_delay_ms: int | None = None,
    ):
        self._sessions = sessions
        self.send_timeout = send_timeout or settings.WHATSAPP_SEND_TIMEOUT
        self.default_delay_ms = settings.BULK_DEFAULT_DELAY_MS if default_delay_ms is None else default_delay_ms

    # =========================================================================
    # 📩 ENVIO ÚNICO
    # =========================================================================
    async def deliver(self, recipient: str, text: str) -> str:
        """
        Envia e propaga NotReady / InvalidTarget / SendFailure.
        Retorna o endereço normalizado.
        """
        network = self._sessions.active_network()
        address = to_contact_address(recipient)

        try:
            await asyncio.wait_for(network.send_message(address, text), self.send_timeout)
        except asyncio.TimeoutError as e:
            raise SendFailure(address, f"timeout após {self.send_timeout}s") from e
        except Exception as e:
            raise SendFailure(address, str(e) or e.__class__.__name__) from e

        logger.info(f"✅ [WA] mensagem enviada para {address}")
        return address

    async def send_one(self, recipient: str, text: str) -> SendResult:
        """
        Versão para fluxos automáticos (resposta do bot, carrinho, lead):
        a falha volta como resultado e nunca derruba quem chamou.
        """
        try:
            address = await self.deliver(recipient, text)
        except GatewayError as e:
            logger.warning(f"⚠️ [WA] mensagem para {recipient} não enviada: {e}")
            return SendResult(success=False, recipient=recipient, error=str(e))

        return SendResult(success=True, recipient=recipient, address=address)

    # =========================================================================
    # 📣 ENVIO EM MASSA
    # =========================================================================
    async def send_bulk(
        self,
        recipients: list[str],
        text: str,
        inter_message_delay: int | None = None,
        cancel_token: CancellationToken | None = None,
        on_progress: ProgressCallback | None = None,
        job_id: str | None = None,
    ) -> BulkSendResult:
        """
        Envia `text` para cada destinatário, um por vez, esperando
        `inter_message_delay` ms entre envios consecutivos (anti-bloqueio).

        A falha de um destinatário não interrompe o lote. Ao final,
        sent + failed == len(recipients), inclusive quando cancelado.
        """
        delay_ms = self.default_delay_ms if inter_message_delay is None else inter_message_delay
        result = BulkSendResult(job_id=job_id, requested=len(recipients))

        if not self._sessions.ready:
            logger.warning("⚠️ Cliente WhatsApp não está pronto. Mensagens em massa não enviadas.")
            for number in recipients:
                result.record_failure(number, "Cliente WhatsApp não está pronto")
            result.status = "not_ready"
            await self._report(on_progress, result)
            return result

        logger.info(f"[bulk] iniciando job={job_id} destinatarios={len(recipients)} delay={delay_ms}ms")
        await self._report(on_progress, result)

        for index, number in enumerate(recipients):
            if index > 0 and delay_ms > 0:
                await self._pause(delay_ms / 1000, cancel_token)

            if cancel_token is not None and cancel_token.cancelled:
                for remaining in recipients[index:]:
                    result.record_failure(remaining, "cancelado")
                result.status = "cancelled"
                logger.warning(f"⚠️ [bulk] job={job_id} cancelado em {index}/{len(recipients)}")
                await self._report(on_progress, result)
                return result

            try:
                await self.deliver(number, text)
                result.record_sent(number)
            except GatewayError as e:
                logger.error(f"❌ [bulk] erro ao enviar mensagem para {number}: {e}")
                result.record_failure(number, str(e))

            await self._report(on_progress, result)

        result.status = "completed"
        logger.info(f"[bulk] job={job_id} concluído sent={result.sent} failed={result.failed}")
        await self._report(on_progress, result)
        return result

    @staticmethod
    async def _pause(seconds: float, cancel_token: CancellationToken | None):
        if cancel_token is None:
            await asyncio.sleep(seconds)
        else:
            await cancel_token.wait(seconds)

    @staticmethod
    async def _report(on_progress: ProgressCallback | None, result: BulkSendResult):
        if on_progress is None:
            return

        try:
            maybe = on_progress(result)
            if inspect.isawaitable(maybe):
                await maybe
        except Exception as e:
            logger.error(f"❌ [bulk] erro reportando progresso: {e}")
