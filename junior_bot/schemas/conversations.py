from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from junior_bot.schemas.whatsapp import SendResult


class MessageRead(BaseModel):
    sender: Literal["customer", "bot"]
    text: str
    timestamp: datetime

    class Config:
        from_attributes = True


class ConversationBase(BaseModel):
    customer: str
    phone: str
    status: Literal["active", "closed"] = "active"


class ConversationCreate(ConversationBase):
    pass


class ConversationRead(ConversationBase):
    conversation_id: str
    created_at: datetime | None = None
    messages: list[MessageRead] = []

    class Config:
        from_attributes = True


class ConversationStatusUpdate(BaseModel):
    status: Literal["active", "closed"]


# ===========================================
# Dashboard
# ===========================================

class ReplyRequest(BaseModel):
    message: str = Field(..., min_length=1)


class ConversationReplyResponse(ConversationRead):
    notification: SendResult | None = None


class LeadCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
