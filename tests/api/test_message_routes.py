"""
Tests for the messages API routes.

Runs the full gateway app (middleware, handlers, lifespan) against the
in-memory messaging client.
"""

import pytest

from wabridge.api.utils.error_helpers import (
    DELETE_FAILED,
    JID_NOT_FOUND,
    MESSAGE_LOG_UNAVAILABLE,
    SEND_BUTTONS_FAILED,
    SEND_FAILED,
    SESSION_NOT_FOUND,
)
from wabridge.domain.enums import EventStatus
from wabridge.domain.models.message_log import MessagePage, MessageRecord
from wabridge.messaging.bulk_dispatcher import JID_NOT_FOUND_ERROR, SEND_FAILED_ERROR

from tests.conftest import TEST_SESSION

BASE = f"/sessions/{TEST_SESSION}/messages"


class TestSendMessage:
    def test_send_returns_message_info(self, api_client, fake_client):
        response = api_client.post(
            f"{BASE}/send", json={"jid": "111", "message": {"text": "hello"}}
        )

        assert response.status_code == 200
        assert response.json()["key"]["remoteJid"] == "111@s.whatsapp.net"
        assert [call[0] for call in fake_client.calls] == ["resolve", "presence", "send"]

    def test_send_emits_success_event(self, api_client, recording_emitter):
        api_client.post(f"{BASE}/send", json={"jid": "111", "message": {"text": "hello"}})

        [event] = recording_emitter.events
        assert event.event == "send.message"
        assert event.data["jid"] == "111@s.whatsapp.net"

    def test_unknown_session(self, api_client):
        response = api_client.post(
            "/sessions/missing/messages/send",
            json={"jid": "111", "message": {"text": "hello"}},
        )

        assert response.status_code == 404
        assert response.json() == {"error": SESSION_NOT_FOUND}

    def test_invalid_body_checked_before_session(self, api_client, fake_client):
        response = api_client.post("/sessions/nope/messages/send", json={"jid": ""})

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"
        assert fake_client.calls_named("send") == []

    def test_unknown_recipient(self, api_client, fake_client, recording_emitter):
        fake_client.unknown.add("111")

        response = api_client.post(
            f"{BASE}/send", json={"jid": "111", "message": {"text": "hello"}}
        )

        assert response.status_code == 400
        assert response.json() == {"error": JID_NOT_FOUND}
        assert fake_client.calls_named("send") == []
        assert recording_emitter.events == []

    def test_send_failure(self, api_client, fake_client, recording_emitter, client_error):
        fake_client.send_failures["111"] = client_error

        response = api_client.post(
            f"{BASE}/send", json={"jid": "111", "message": {"text": "hello"}}
        )

        assert response.status_code == 500
        assert response.json() == {"error": SEND_FAILED}
        assert recording_emitter.events[0].status == EventStatus.ERROR

    def test_invalid_body(self, api_client):
        response = api_client.post(f"{BASE}/send", json={"message": {"text": "hello"}})

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_empty_message_rejected(self, api_client):
        response = api_client.post(f"{BASE}/send", json={"jid": "111", "message": {}})

        assert response.status_code == 400


class TestSendBulk:
    def test_mixed_outcome_is_200(self, api_client, fake_client):
        fake_client.unknown.add("222")

        response = api_client.post(
            f"{BASE}/send/bulk",
            json=[
                {"jid": "111", "delay": 0, "message": {"text": "a"}},
                {"jid": "222", "delay": 0, "message": {"text": "b"}},
            ],
        )

        assert response.status_code == 200
        body = response.json()
        assert [item["index"] for item in body["results"]] == [0]
        assert body["errors"] == [{"index": 1, "error": JID_NOT_FOUND_ERROR}]

    def test_all_failed_is_500(self, api_client, fake_client, client_error):
        fake_client.send_failures["111"] = client_error
        fake_client.send_failures["222"] = client_error

        response = api_client.post(
            f"{BASE}/send/bulk",
            json=[
                {"jid": "111", "delay": 0, "message": {"text": "a"}},
                {"jid": "222", "delay": 0, "message": {"text": "b"}},
            ],
        )

        assert response.status_code == 500
        assert response.json() == {
            "results": [],
            "errors": [
                {"index": 0, "error": SEND_FAILED_ERROR},
                {"index": 1, "error": SEND_FAILED_ERROR},
            ],
        }

    def test_empty_batch_is_200(self, api_client):
        response = api_client.post(f"{BASE}/send/bulk", json=[])

        assert response.status_code == 200
        assert response.json() == {"results": [], "errors": []}

    def test_negative_delay_rejected(self, api_client, fake_client):
        response = api_client.post(
            f"{BASE}/send/bulk",
            json=[{"jid": "111", "delay": -1, "message": {"text": "a"}}],
        )

        assert response.status_code == 400
        assert fake_client.calls == []

    def test_bulk_and_single_send_share_error_text(self, api_client, fake_client):
        fake_client.unknown.add("111")

        single = api_client.post(
            f"{BASE}/send", json={"jid": "111", "message": {"text": "a"}}
        )
        bulk = api_client.post(
            f"{BASE}/send/bulk",
            json=[{"jid": "111", "delay": 0, "message": {"text": "a"}}],
        )

        assert JID_NOT_FOUND is JID_NOT_FOUND_ERROR
        assert SEND_FAILED is SEND_FAILED_ERROR
        assert single.json() == {"error": bulk.json()["errors"][0]["error"]}


class TestInteractiveMessages:
    def test_buttons_include_warning(self, api_client, fake_client):
        response = api_client.post(
            f"{BASE}/send/buttons",
            json={"jid": "111", "text": "Pick", "buttons": [{"text": "Yes"}]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["warning"]
        assert fake_client.calls_named("send")[0][2]["buttons"][0]["buttonId"] == "btn_0"

    def test_buttons_failure(self, api_client, fake_client, client_error):
        fake_client.presence_failures["111"] = client_error

        response = api_client.post(
            f"{BASE}/send/buttons",
            json={"jid": "111", "text": "Pick", "buttons": [{"text": "Yes"}]},
        )

        assert response.status_code == 500
        assert response.json() == {"error": SEND_BUTTONS_FAILED}

    def test_list(self, api_client):
        response = api_client.post(
            f"{BASE}/send/list",
            json={
                "jid": "111",
                "text": "Menu",
                "sections": [{"title": "Drinks", "rows": [{"title": "Tea"}]}],
            },
        )

        assert response.status_code == 200
        assert "warning" in response.json()

    def test_template_buttons(self, api_client, fake_client):
        response = api_client.post(
            f"{BASE}/send/template-buttons",
            json={
                "jid": "111",
                "text": "Visit",
                "buttons": [{"type": "url", "text": "Site", "url": "https://example.com"}],
            },
        )

        assert response.status_code == 200
        content = fake_client.calls_named("send")[0][2]
        assert content["templateButtons"][0]["index"] == 1

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "example.com",
            "www.example.com/page",
            "ftp://example.com/file",
            "http://127.0.0.1:8080/status",
        ],
    )
    def test_link(self, api_client, fake_client, url):
        response = api_client.post(
            f"{BASE}/send/link", json={"jid": "111", "text": "Read", "url": url}
        )

        assert response.status_code == 200
        assert fake_client.calls_named("send")[0][2] == {"text": f"Read\n\n{url}"}

    @pytest.mark.parametrize(
        "url", ["nope", "http://localhost/page", "file:///etc/passwd", "ws://example.com"]
    )
    def test_link_with_invalid_url(self, api_client, fake_client, url):
        response = api_client.post(
            f"{BASE}/send/link", json={"jid": "111", "text": "Read", "url": url}
        )

        assert response.status_code == 400
        assert fake_client.calls_named("send") == []


class TestDownloadMedia:
    def test_download_uses_mimetype(self, api_client, fake_client):
        response = api_client.post(
            f"{BASE}/download",
            json={
                "key": {"remoteJid": "111@s.whatsapp.net", "id": "ABC"},
                "message": {"imageMessage": {"mimetype": "image/jpeg", "url": "x"}},
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert response.content == fake_client.media

    def test_download_forwards_only_given_fields(self, api_client, fake_client):
        message = {"imageMessage": {"mimetype": "image/png", "url": "x"}}

        response = api_client.post(f"{BASE}/download", json={"message": message})

        assert response.status_code == 200
        assert fake_client.calls_named("download")[0][1] == {"message": message}

    def test_download_without_mimetype(self, api_client):
        response = api_client.post(
            f"{BASE}/download", json={"message": {"imageMessage": {"url": "x"}}}
        )

        assert response.status_code == 500


class TestDeleteMessages:
    def test_delete_for_everyone(self, api_client, fake_client):
        key = {"remoteJid": "111@s.whatsapp.net", "fromMe": True, "id": "ABC"}

        response = api_client.request(
            "DELETE", f"{BASE}/delete", json={"jid": "111", "message": key}
        )

        assert response.status_code == 200
        assert fake_client.calls_named("send")[0][2] == {"delete": key}

    def test_delete_for_me_uses_chat_modify(self, api_client, fake_client):
        response = api_client.request(
            "DELETE",
            f"{BASE}/delete/onlyme",
            json={
                "jid": "111@s.whatsapp.net",
                "message": {"id": "ABC", "fromMe": False, "timestamp": "1654823909"},
            },
        )

        assert response.status_code == 200
        [call] = fake_client.calls_named("chat_modify")
        assert call[2]["clear"] is True
        assert fake_client.calls_named("send") == []

    def test_delete_unknown_recipient(self, api_client, fake_client):
        fake_client.unknown.add("111")

        response = api_client.request(
            "DELETE", f"{BASE}/delete", json={"jid": "111", "message": {"id": "ABC"}}
        )

        assert response.status_code == 400

    def test_delete_failure(self, api_client, fake_client, client_error):
        fake_client.send_failures["111"] = client_error

        response = api_client.request(
            "DELETE", f"{BASE}/delete", json={"jid": "111", "message": {"id": "ABC"}}
        )

        assert response.status_code == 500
        assert response.json() == {"error": DELETE_FAILED}


class StaticRepository:
    def __init__(self, page: MessagePage):
        self.page = page
        self.calls = []

    async def list_page(self, session_id, cursor=None, limit=25):
        self.calls.append((session_id, cursor, limit))
        return self.page


class TestListMessages:
    def test_message_log_not_configured(self, api_client):
        response = api_client.get(BASE)

        assert response.status_code == 503
        assert response.json() == {"error": MESSAGE_LOG_UNAVAILABLE}

    def test_page_uses_camel_case(self, api_client, gateway_app):
        record = MessageRecord(
            pk_id=7,
            session_id=TEST_SESSION,
            remote_jid="111@s.whatsapp.net",
            id="ABC",
            from_me=True,
        )
        repository = StaticRepository(MessagePage(data=[record], cursor=7))
        gateway_app.state.message_repository = repository

        response = api_client.get(BASE, params={"cursor": 3, "limit": 1})

        assert response.status_code == 200
        body = response.json()
        assert body["cursor"] == 7
        assert body["data"][0]["pkId"] == 7
        assert body["data"][0]["remoteJid"] == "111@s.whatsapp.net"
        assert repository.calls == [(TEST_SESSION, 3, 1)]


class TestHealth:
    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health_without_database(self, api_client):
        response = api_client.get("/health/detailed")

        assert response.status_code == 200
        assert response.json()["collaborators"]["database"] == {"configured": False}
