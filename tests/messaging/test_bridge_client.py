"""
Tests for the bridge sidecar client, using a mocked aiohttp session.
"""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from wabridge.domain.enums import RecipientKind, WAPresence
from wabridge.domain.interfaces.messaging_interface import MessagingClientError
from wabridge.messaging.bridge import BaileysBridgeClient, BridgeUrlBuilder

BASE_URL = "http://bridge.local:8081/"


def mock_response(status: int = 200, json_data=None, body: bytes = b"") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.content_length = None
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value="bridge says no")
    response.read = AsyncMock(return_value=body)
    return response


def mock_session(response: MagicMock) -> MagicMock:
    session = MagicMock()
    session.post.return_value.__aenter__.return_value = response
    session.get.return_value.__aenter__.return_value = response
    return session


def make_client(session: MagicMock, api_key: str | None = "secret") -> BaileysBridgeClient:
    return BaileysBridgeClient(session, base_url=BASE_URL, api_key=api_key)


class TestBridgeUrlBuilder:
    def test_session_url(self):
        builder = BridgeUrlBuilder(BASE_URL)

        assert builder.session_url("sales") == "http://bridge.local:8081/sessions/sales"
        assert (
            builder.session_url("sales", "/messages")
            == "http://bridge.local:8081/sessions/sales/messages"
        )

    def test_session_id_is_quoted(self):
        builder = BridgeUrlBuilder(BASE_URL)

        assert builder.session_url("a/b") == "http://bridge.local:8081/sessions/a%2Fb"


@pytest.mark.asyncio
class TestBaileysBridgeClient:
    async def test_has_session(self):
        session = mock_session(mock_response(200))

        assert await make_client(session).has_session("sales") is True
        args, kwargs = session.get.call_args
        assert args == ("http://bridge.local:8081/sessions/sales",)
        assert kwargs["headers"]["Authorization"] == "Bearer secret"

    async def test_missing_session(self):
        session = mock_session(mock_response(404))

        assert await make_client(session).has_session("sales") is False

    async def test_resolve_recipient(self):
        session = mock_session(mock_response(json_data={"jid": "111@s.whatsapp.net"}))

        jid = await make_client(session).resolve_recipient(
            "sales", "111", RecipientKind.INDIVIDUAL
        )

        assert jid == "111@s.whatsapp.net"
        _, kwargs = session.post.call_args
        assert kwargs["json"] == {"jid": "111", "type": "number"}

    async def test_unresolved_recipient(self):
        session = mock_session(mock_response(json_data={"jid": None}))

        assert (
            await make_client(session).resolve_recipient("sales", "1", RecipientKind.GROUP)
            is None
        )

    async def test_send_message_payload(self):
        session = mock_session(mock_response(json_data={"key": {"id": "ABC"}}))
        client = make_client(session, api_key=None)

        result = await client.send_message(
            "sales", "111@s.whatsapp.net", {"text": "hi"}, {"quoted": {"id": "Q"}}
        )

        assert result == {"key": {"id": "ABC"}}
        args, kwargs = session.post.call_args
        assert args == ("http://bridge.local:8081/sessions/sales/messages",)
        assert kwargs["json"] == {
            "jid": "111@s.whatsapp.net",
            "message": {"text": "hi"},
            "options": {"quoted": {"id": "Q"}},
        }
        assert "Authorization" not in kwargs["headers"]

    async def test_update_presence_payload(self):
        session = mock_session(mock_response(json_data=None))

        await make_client(session).update_presence(
            "sales", WAPresence.AVAILABLE, "111@s.whatsapp.net"
        )

        _, kwargs = session.post.call_args
        assert kwargs["json"] == {"jid": "111@s.whatsapp.net", "presence": "available"}

    async def test_chat_modify_payload(self):
        session = mock_session(mock_response(json_data={"ok": True}))

        await make_client(session).chat_modify("sales", {"clear": True}, "111@s.whatsapp.net")

        args, kwargs = session.post.call_args
        assert args == ("http://bridge.local:8081/sessions/sales/chats/modify",)
        assert kwargs["json"] == {"jid": "111@s.whatsapp.net", "modification": {"clear": True}}

    async def test_download_media_returns_bytes(self):
        session = mock_session(mock_response(body=b"\xff\xd8jpeg"))

        data = await make_client(session).download_media(
            "sales", {"message": {"imageMessage": {}}}
        )

        assert data == b"\xff\xd8jpeg"

    async def test_http_error_raises_client_error(self):
        session = mock_session(mock_response(500))

        with pytest.raises(MessagingClientError) as exc_info:
            await make_client(session).send_message("sales", "111", {"text": "hi"})

        assert exc_info.value.status == 500
        assert exc_info.value.body == "bridge says no"

    async def test_connection_error_raises_client_error(self):
        session = MagicMock()
        session.post.side_effect = aiohttp.ClientConnectionError("refused")

        with pytest.raises(MessagingClientError, match="connection error"):
            await make_client(session).send_message("sales", "111", {"text": "hi"})
