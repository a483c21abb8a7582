"""
Pytest configuration and common fixtures for wabridge tests.

Provides an in-memory messaging client, a recording event emitter and a
configured gateway app for all test modules.
"""

import os
import tempfile
from collections.abc import Generator
from typing import Any

# Settings are read at import time, so the test environment goes first
os.environ["ENVIRONMENT"] = "DEV"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "wabridge-test-logs")
os.environ.pop("DATABASE_URL", None)
os.environ.pop("WEBHOOK_URL", None)

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from wabridge.core.app import create_app  # noqa: E402
from wabridge.domain.enums import EventStatus, RecipientKind, WAPresence  # noqa: E402
from wabridge.domain.interfaces.event_interface import IEventEmitter  # noqa: E402
from wabridge.domain.interfaces.messaging_interface import (  # noqa: E402
    IMessagingClient,
    MessagingClientError,
)
from wabridge.domain.models.gateway_event import GatewayEvent  # noqa: E402

TEST_SESSION = "test-session"


def _bare(jid: str) -> str:
    return jid.split("@", 1)[0]


class FakeMessagingClient(IMessagingClient):
    """
    In-memory messaging client.

    Numbers listed in ``unknown`` do not resolve; numbers in the failure maps
    raise at the matching step. Every call is appended to ``calls`` so tests
    can assert on ordering.
    """

    def __init__(self, sessions: tuple[str, ...] = (TEST_SESSION,)):
        self.sessions = set(sessions)
        self.unknown: set[str] = set()
        self.resolve_failures: dict[str, Exception] = {}
        self.presence_failures: dict[str, Exception] = {}
        self.send_failures: dict[str, Exception] = {}
        self.calls: list[tuple] = []
        self.media = b"\x89PNG fake media"
        self._sent = 0

    async def has_session(self, session_id: str) -> bool:
        return session_id in self.sessions

    async def resolve_recipient(
        self, session_id: str, jid: str, kind: RecipientKind = RecipientKind.INDIVIDUAL
    ) -> str | None:
        self.calls.append(("resolve", jid))
        if _bare(jid) in self.resolve_failures:
            raise self.resolve_failures[_bare(jid)]
        if _bare(jid) in self.unknown:
            return None
        if "@" in jid:
            return jid
        suffix = "@g.us" if kind == RecipientKind.GROUP else "@s.whatsapp.net"
        return f"{jid}{suffix}"

    async def update_presence(
        self, session_id: str, presence: WAPresence, jid: str
    ) -> None:
        self.calls.append(("presence", jid, presence))
        if _bare(jid) in self.presence_failures:
            raise self.presence_failures[_bare(jid)]

    async def send_message(
        self,
        session_id: str,
        jid: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> Any:
        self.calls.append(("send", jid, content, options))
        if _bare(jid) in self.send_failures:
            raise self.send_failures[_bare(jid)]
        self._sent += 1
        return {
            "key": {"remoteJid": jid, "id": f"MSG{self._sent}", "fromMe": True},
            "message": content,
            "messageTimestamp": 1700000000 + self._sent,
            "status": 1,
        }

    async def chat_modify(
        self, session_id: str, modification: dict[str, Any], jid: str
    ) -> Any:
        self.calls.append(("chat_modify", jid, modification))
        return {"modified": True}

    async def download_media(self, session_id: str, message: dict[str, Any]) -> bytes:
        self.calls.append(("download", message))
        return self.media

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


class RecordingEmitter(IEventEmitter):
    """Event emitter that keeps every emitted event in order."""

    def __init__(self):
        self.events: list[GatewayEvent] = []

    def emit(
        self,
        event: str,
        session_id: str,
        data: Any = None,
        status: EventStatus | str = EventStatus.SUCCESS,
        message: str | None = None,
    ) -> None:
        self.events.append(
            GatewayEvent(
                event=event,
                session_id=session_id,
                data=data,
                status=EventStatus(status),
                message=message,
            )
        )


@pytest.fixture
def fake_client() -> FakeMessagingClient:
    return FakeMessagingClient()


@pytest.fixture
def recording_emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def recording_sleep(fake_client: FakeMessagingClient):
    """Sleep replacement that records the wait in the client's call log."""

    async def sleep(seconds: float) -> None:
        fake_client.calls.append(("sleep", seconds))

    return sleep


@pytest.fixture
def client_error() -> MessagingClientError:
    return MessagingClientError("Bridge returned 500", status=500, body="boom")


@pytest.fixture
def temp_db() -> Generator[str, None, None]:
    """Create a temporary SQLite database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp:
        db_path = tmp.name

    db_url = f"sqlite+aiosqlite:///{db_path}"
    yield db_url

    try:
        os.unlink(db_path)
    except OSError:
        pass


@pytest.fixture
def gateway_app(
    fake_client: FakeMessagingClient, recording_emitter: RecordingEmitter
) -> FastAPI:
    """Gateway app wired to the fake client, without a message log."""
    return create_app(
        messaging_client=fake_client, database_url=None, emitter=recording_emitter
    )


@pytest.fixture
def api_client(gateway_app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client with the app lifespan running."""
    with TestClient(gateway_app) as client:
        yield client

