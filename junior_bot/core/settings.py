from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./data/junior_bot.db"
    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None

    # Bridge REST (whatsapp-web.js)
    WHATSAPP_BRIDGE_URL: str = "http://localhost:3001"
    WHATSAPP_BRIDGE_API_KEY: str = ""
    WHATSAPP_SESSION_ID: str = "junior-bot"
    WHATSAPP_SESSION_DIR: str = ".wwebjs_auth"
    WHATSAPP_AUTOSTART: bool = True
    WHATSAPP_SEND_TIMEOUT: float = 20.0

    # Envio em massa
    BULK_DEFAULT_DELAY_MS: int = 5000
    BULK_JOB_TTL_SECONDS: int = 60 * 60 * 24

    # Classificador de intenção remoto (opcional)
    NLU_URL: str | None = None
    NLU_TIMEOUT: float = 5.0

    class Config:
        env_file = ".env"

settings = Settings()
