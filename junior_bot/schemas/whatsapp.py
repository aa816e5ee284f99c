from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


# ===========================================
# Sessão
# ===========================================

class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    AWAITING_SCAN = "awaiting_scan"
    AUTHENTICATED = "authenticated"
    READY = "ready"
    DISCONNECTED = "disconnected"


class SessionStatus(BaseModel):
    state: SessionState
    ready: bool
    qr: Optional[str] = None
    last_error: Optional[str] = None


# ===========================================
# Rede (bridge)
# ===========================================

class ContactInfo(BaseModel):
    id: str
    name: Optional[str] = None


class ChatInfo(BaseModel):
    id: str
    name: Optional[str] = None
    is_group: bool = False
    participants: list[str] = []  # ids sem sufixo, na ordem da rede


class CreatedGroup(BaseModel):
    group_id: str


# ===========================================
# Inbound
# ===========================================

class InboundMessage(BaseModel):
    sender: str = Field(..., alias="from")
    body: str = ""

    class Config:
        populate_by_name = True


class InboundTurn(BaseModel):
    status: Literal["ignored", "replied", "send_failed", "abandoned"]
    phone: Optional[str] = None
    conversation_id: Optional[str] = None
    reply: Optional[str] = None
    error: Optional[str] = None


class WhatsAppWebhook(BaseModel):
    sessionId: Optional[str] = None
    dataType: str
    data: dict = {}


# ===========================================
# Outbound
# ===========================================

class SendResult(BaseModel):
    success: bool
    recipient: str
    address: Optional[str] = None
    error: Optional[str] = None


class BulkSendDetail(BaseModel):
    number: str
    status: Literal["sent", "failed"]
    timestamp: datetime
    error: Optional[str] = None


class BulkSendResult(BaseModel):
    job_id: Optional[str] = None
    status: Literal["running", "completed", "cancelled", "not_ready"] = "running"
    requested: int = 0
    sent: int = 0
    failed: int = 0
    details: list[BulkSendDetail] = []

    def record_sent(self, number: str):
        self.sent += 1
        self.details.append(
            BulkSendDetail(number=number, status="sent", timestamp=datetime.now())
        )

    def record_failure(self, number: str, error: str):
        self.failed += 1
        self.details.append(
            BulkSendDetail(number=number, status="failed", timestamp=datetime.now(), error=error)
        )


class SendRequest(BaseModel):
    number: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class BulkSendRequest(BaseModel):
    numbers: list[str] = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    delay_ms: Optional[int] = Field(default=None, ge=0)


class BulkJobAccepted(BaseModel):
    job_id: str
    status: str = "accepted"
    requested: int


# ===========================================
# Grupos
# ===========================================

class GroupRosterResult(BaseModel):
    success: bool
    group_name: Optional[str] = None
    participant_count: int = 0
    numbers: list[str] = []
    reason: Optional[Literal["not_ready", "invalid_target", "not_a_group", "unreachable"]] = None
    error: Optional[str] = None


class GroupCreateResult(BaseModel):
    success: bool
    group_id: Optional[str] = None
    group_name: Optional[str] = None
    participant_count: int = 0
    reason: Optional[Literal["not_ready", "invalid_target", "unreachable"]] = None
    error: Optional[str] = None


class GroupExtractRequest(BaseModel):
    group_id: str = Field(..., min_length=1)


class GroupCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    participants: list[str] = Field(..., min_length=1)
