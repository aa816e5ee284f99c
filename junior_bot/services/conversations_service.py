import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from junior_bot.core.errors import PersistenceFailure
from junior_bot.models.conversations import Conversation, Message
from junior_bot.schemas.conversations import ConversationCreate

logger = logging.getLogger("conversations_service")


def _fail(db: Session, e: SQLAlchemyError):
    db.rollback()
    logger.error(f"❌ Erro de banco nas conversas: {e}")
    raise PersistenceFailure(str(e)) from e


def list_conversations(db: Session) -> list[Conversation]:
    return db.query(Conversation).order_by(Conversation.created_at.desc()).all()


def get_conversation(db: Session, conversation_id: str) -> Conversation | None:
    return db.get(Conversation, conversation_id)


def get_conversation_by_phone(db: Session, phone: str) -> Conversation | None:
    try:
        return db.query(Conversation).filter(Conversation.phone == phone).first()
    except SQLAlchemyError as e:
        _fail(db, e)


def create_conversation(db: Session, data: ConversationCreate) -> Conversation:
    conv = Conversation(**data.model_dump())
    db.add(conv)
    try:
        db.commit()
    except SQLAlchemyError as e:
        _fail(db, e)
    db.refresh(conv)
    return conv


def ensure_conversation(db: Session, phone: str, customer: str | None = None) -> Conversation:
    """
    Busca ou cria a conversa do telefone.
    Nunca cria duplicata: o telefone é único no banco e, se outra escrita
    criou a conversa antes, reaproveita a existente.
    """
    conv = get_conversation_by_phone(db, phone)
    if conv:
        return conv

    try:
        return create_conversation(db, ConversationCreate(customer=customer or phone, phone=phone))
    except PersistenceFailure as e:
        if not isinstance(e.__cause__, IntegrityError):
            raise

    conv = get_conversation_by_phone(db, phone)
    if conv is None:
        raise PersistenceFailure(f"conversa de {phone} não encontrada após conflito")
    return conv


def append_message(db: Session, conv: Conversation, sender: str, text: str) -> Message:
    """
    Adiciona uma mensagem no fim do histórico.
    O timestamp nunca fica antes da última mensagem da conversa.
    """
    if not text:
        raise ValueError("mensagem vazia")

    try:
        now = datetime.now()
        last = (
            db.query(Message.timestamp)
            .filter(Message.conversation_id == conv.conversation_id)
            .order_by(Message.seq.desc())
            .first()
        )
        if last and last.timestamp > now:
            now = last.timestamp

        msg = Message(
            conversation_id=conv.conversation_id,
            sender=sender,
            text=text,
            timestamp=now,
        )
        db.add(msg)
        db.commit()
    except SQLAlchemyError as e:
        _fail(db, e)

    db.refresh(msg)
    db.expire(conv, ["messages"])
    return msg


def set_status(db: Session, conv: Conversation, status: str) -> Conversation:
    conv.status = status
    try:
        db.commit()
    except SQLAlchemyError as e:
        _fail(db, e)
    db.refresh(conv)
    return conv
