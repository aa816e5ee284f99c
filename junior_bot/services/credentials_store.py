# file: junior_bot/services/credentials_store.py

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger("credentials_store")


class LocalAuthStore:
    """
    Persistência das credenciais da sessão WhatsApp num diretório local,
    no mesmo formato do LocalAuth: <base_dir>/session-<client_id>/credentials.json
    """

    def __init__(self, base_dir: str | Path, client_id: str):
        self.base_dir = Path(base_dir)
        self.client_id = client_id

    @property
    def session_dir(self) -> Path:
        return self.base_dir / f"session-{self.client_id}"

    @property
    def path(self) -> Path:
        return self.session_dir / "credentials.json"

    def prepare(self) -> Path:
        self.session_dir.mkdir(parents=True, exist_ok=True)
        return self.session_dir

    def load(self) -> dict[str, Any] | None:
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Credenciais ilegíveis em {self.path}, ignorando: {e}")
            return None

        return data if isinstance(data, dict) else None

    def save(self, credentials: dict[str, Any]):
        self.prepare()
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(credentials), encoding="utf-8")
        tmp.replace(self.path)
        logger.info(f"[auth] credenciais salvas em {self.path}")

    def clear(self):
        self.path.unlink(missing_ok=True)
