from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
from junior_bot.db.base import Base

class Conversation(Base):
    __tablename__ = "conversations"

    conversation_id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    customer = Column(String, nullable=False)
    phone = Column(String, nullable=False, unique=True)

    status = Column(String, nullable=False, default="active")  # active/closed

    created_at = Column(DateTime, default=datetime.now)

    messages = relationship(
        "Message",
        back_populates="conversation",
        order_by="Message.seq",
        lazy="selectin",
    )


class Message(Base):
    __tablename__ = "messages"

    # ordem de inserção = ordem cronológica
    seq = Column(Integer, primary_key=True, autoincrement=True)

    conversation_id = Column(String, ForeignKey("conversations.conversation_id"), nullable=False, index=True)

    sender = Column(String, nullable=False)  # customer/bot
    text = Column(Text, nullable=False)
    timestamp = Column(DateTime, nullable=False)

    conversation = relationship("Conversation", back_populates="messages")
