# file: junior_bot/services/session_manager.py

import asyncio
import logging
from typing import Any

from pyee.asyncio import AsyncIOEventEmitter

from junior_bot.core.errors import NotReady, SessionError
from junior_bot.schemas.whatsapp import SessionState, SessionStatus
from junior_bot.services.credentials_store import LocalAuthStore
from junior_bot.services.ports import ChatNetwork

logger = logging.getLogger("session_manager")


class SessionManager:
    """
    Dono do ciclo de vida da única sessão WhatsApp do processo:

        uninitialized -> awaiting_scan -> authenticated -> ready
                      (qualquer estado) -> disconnected

    Os eventos do bridge (qr, authenticated, ready, disconnected) chegam
    pelos handle_*; as transições são serializadas por um lock.
    Assinantes escutam em `events` ("qr", "authenticated", "ready",
    "disconnected", "state_changed").
    """

    def __init__(
        self,
        network: ChatNetwork,
        credentials: LocalAuthStore,
        events: AsyncIOEventEmitter | None = None,
    ):
        self._network = network
        self._credentials = credentials
        self._events = events or AsyncIOEventEmitter()
        self._lock = asyncio.Lock()

        self._state = SessionState.UNINITIALIZED
        self._qr: str | None = None
        self._last_error: str | None = None

    # --------------------------------------------------------
    # Estado
    # --------------------------------------------------------
    @property
    def events(self) -> AsyncIOEventEmitter:
        return self._events

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is SessionState.READY

    @property
    def qr(self) -> str | None:
        return self._qr

    def status(self) -> SessionStatus:
        return SessionStatus(
            state=self._state,
            ready=self.ready,
            qr=self._qr,
            last_error=self._last_error,
        )

    def require_ready(self):
        if not self.ready:
            raise NotReady()

    def active_network(self) -> ChatNetwork:
        self.require_ready()
        return self._network

    def _set_state(self, new_state: SessionState):
        old_state = self._state
        self._state = new_state
        logger.info(f"[session] {old_state.value} -> {new_state.value}")
        self._events.emit("state_changed", old_state, new_state)

    # --------------------------------------------------------
    # Inicialização
    # --------------------------------------------------------
    async def initialize(self) -> SessionStatus:
        async with self._lock:
            if self._state not in (SessionState.UNINITIALIZED, SessionState.DISCONNECTED):
                logger.info(f"[session] initialize ignorado, estado atual={self._state.value}")
                return self.status()

            try:
                self._credentials.prepare()
            except OSError as e:
                logger.error(f"❌ [session] diretório de credenciais inacessível: {e}")
                self._fail_start(f"diretório de credenciais inacessível: {e}")
                raise SessionError(self._last_error) from e

            credentials = self._credentials.load()

            self._qr = None
            self._last_error = None
            self._set_state(SessionState.AWAITING_SCAN)

            try:
                await self._network.start(credentials)
            except Exception as e:
                logger.error(f"❌ [session] bridge recusou iniciar a sessão: {e}")
                self._fail_start(str(e))
                raise SessionError(str(e)) from e

            return self.status()

    def _fail_start(self, reason: str):
        self._last_error = reason
        self._set_state(SessionState.DISCONNECTED)
        self._events.emit("disconnected", reason)

    # --------------------------------------------------------
    # Eventos da rede
    # --------------------------------------------------------
    async def handle_qr(self, code: str):
        async with self._lock:
            if self._state is not SessionState.AWAITING_SCAN:
                logger.warning(f"⚠️ [session] QR recebido fora de awaiting_scan ({self._state.value})")
                return

            self._qr = code
            logger.info("[session] QR Code recebido, escaneie para autenticar")
            self._events.emit("qr", code)

    async def handle_authenticated(self, credentials: dict[str, Any] | None = None):
        async with self._lock:
            if self._state is not SessionState.AWAITING_SCAN:
                logger.warning(f"⚠️ [session] authenticated fora de ordem ({self._state.value})")
                return

            self._qr = None
            self._set_state(SessionState.AUTHENTICATED)

            if credentials:
                try:
                    self._credentials.save(credentials)
                except OSError as e:
                    # sessão em memória continua válida
                    self._last_error = f"falha salvando credenciais: {e}"
                    logger.error(f"❌ [session] {self._last_error}")

            self._events.emit("authenticated")

    async def handle_ready(self):
        async with self._lock:
            if self._state is not SessionState.AUTHENTICATED:
                logger.warning(f"⚠️ [session] ready fora de ordem ({self._state.value})")
                return

            self._set_state(SessionState.READY)
            logger.info("✅ Cliente WhatsApp pronto para uso!")
            self._events.emit("ready")

    async def handle_disconnected(self, reason: str | None = None):
        async with self._lock:
            if self._state in (SessionState.UNINITIALIZED, SessionState.DISCONNECTED):
                return

            self._last_error = reason
            self._set_state(SessionState.DISCONNECTED)
            logger.warning(f"⚠️ [session] desconectado: {reason}")
            self._events.emit("disconnected", reason)

    # --------------------------------------------------------
    # Encerramento
    # --------------------------------------------------------
    async def logout(self) -> SessionStatus:
        async with self._lock:
            if self._state is SessionState.UNINITIALIZED:
                return self.status()

            try:
                await self._network.logout()
            except Exception as e:
                logger.warning(f"⚠️ [session] logout no bridge falhou: {e}")

            self._qr = None
            self._set_state(SessionState.UNINITIALIZED)

            try:
                self._credentials.clear()
            except OSError as e:
                # sessão já encerrada na rede; credenciais ficaram no disco
                self._last_error = f"falha removendo credenciais: {e}"
                logger.error(f"❌ [session] {self._last_error}")
                raise SessionError(self._last_error) from e

            return self.status()

    async def shutdown(self):
        async with self._lock:
            self._qr = None
            if self._state is not SessionState.UNINITIALIZED:
                self._set_state(SessionState.UNINITIALIZED)
