import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("WHATSAPP_AUTOSTART", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from junior_bot.db import models_registry  # noqa: F401
from junior_bot.db.base import Base
from junior_bot.db.session import get_db
from junior_bot.main import app
from junior_bot.schemas.whatsapp import ContactInfo, CreatedGroup
from junior_bot.services.credentials_store import LocalAuthStore
from junior_bot.services.gateway import build_gateway, get_gateway
from junior_bot.services.responder import KeywordResponder


class FakeNetwork:
    """Dublê do bridge WhatsApp: grava chamadas e simula falhas."""

    def __init__(self):
        self.started_with = []
        self.start_error = None
        self.logged_out = False

        self.sent = []
        self.fail_for = set()
        self.send_delay = 0.0

        self.contacts = {}
        self.chats = {}
        self.created_groups = []
        self.create_group_error = None

    async def start(self, credentials):
        if self.start_error:
            raise self.start_error
        self.started_with.append(credentials)

    async def logout(self):
        self.logged_out = True

    async def send_message(self, address, text):
        if self.send_delay:
            await asyncio.sleep(self.send_delay)
        if address in self.fail_for:
            raise RuntimeError("número bloqueado")
        self.sent.append((address, text))

    async def get_contact_by_id(self, address):
        if address not in self.contacts:
            raise RuntimeError("contato não encontrado")
        return ContactInfo(id=address, name=self.contacts[address])

    async def get_chat_by_id(self, address):
        if address not in self.chats:
            raise RuntimeError("chat não encontrado")
        return self.chats[address]

    async def create_group(self, name, participants):
        if self.create_group_error:
            raise self.create_group_error
        self.created_groups.append((name, participants))
        return CreatedGroup(group_id="120363000000000001@g.us")


async def _bring_online(sessions, credentials=None):
    await sessions.initialize()
    await sessions.handle_authenticated(credentials)
    await sessions.handle_ready()


@pytest.fixture
def bring_online():
    return _bring_online


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def network():
    return FakeNetwork()


@pytest.fixture
def credentials(tmp_path):
    return LocalAuthStore(tmp_path / ".wwebjs_auth", "test")


@pytest.fixture
def gateway(network, credentials, session_factory):
    return build_gateway(
        network=network,
        credentials=credentials,
        responder=KeywordResponder(),
        session_factory=session_factory,
        send_timeout=1.0,
        default_delay_ms=0,
    )


@pytest.fixture
def online_gateway(gateway):
    asyncio.run(_bring_online(gateway.sessions))
    return gateway


@pytest.fixture(scope="function")
def client(gateway, session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()
