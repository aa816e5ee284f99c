# file: junior_bot/core/errors.py


class GatewayError(Exception):
    pass


class NotReady(GatewayError):
    """Operação tentada antes do cliente WhatsApp ficar pronto."""

    def __init__(self, message: str = "Cliente WhatsApp não está pronto"):
        super().__init__(message)


class SendFailure(GatewayError):
    """A rede recusou o envio ou estourou o tempo limite."""

    def __init__(self, address: str, cause: str):
        self.address = address
        self.cause = cause
        super().__init__(f"falha ao enviar para {address}: {cause}")


class PersistenceFailure(GatewayError):
    """Falha gravando no banco de conversas."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"falha de persistência: {cause}")


class InvalidTarget(GatewayError):
    pass


class SessionError(GatewayError):
    pass
