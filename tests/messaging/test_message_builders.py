"""
Tests for the message content builders and their request models.
"""

import pytest
from pydantic import ValidationError

from wabridge.messaging.message_builders import (
    DEFAULT_LIST_BUTTON_TEXT,
    build_button_message,
    build_clear_for_me_modification,
    build_delete_message,
    build_link_message,
    build_list_message,
    build_template_buttons_message,
)
from wabridge.messaging.models import (
    ButtonMessageRequest,
    DeleteForMeRequest,
    LinkMessageRequest,
    ListMessageRequest,
    TemplateButtonsMessageRequest,
)


class TestButtonMessage:
    def test_buttons_get_positional_ids(self):
        request = ButtonMessageRequest(
            jid="111",
            text="Pick one",
            buttons=[{"text": "Yes"}, {"text": "No", "id": "no"}],
        )

        content = build_button_message(request)

        assert content == {
            "text": "Pick one",
            "footer": "",
            "buttons": [
                {"buttonId": "btn_0", "buttonText": {"displayText": "Yes"}, "type": 1},
                {"buttonId": "no", "buttonText": {"displayText": "No"}, "type": 1},
            ],
            "headerType": 1,
        }

    def test_more_than_three_buttons_rejected(self):
        with pytest.raises(ValidationError):
            ButtonMessageRequest(
                jid="111", text="Pick", buttons=[{"text": str(i)} for i in range(4)]
            )


class TestListMessage:
    def test_rows_default_to_title_ids(self):
        request = ListMessageRequest(
            jid="111",
            text="Menu",
            footer="Thanks",
            buttonText="Open",
            sections=[
                {
                    "title": "Drinks",
                    "rows": [
                        {"title": "Coffee", "description": "Hot"},
                        {"title": "Tea", "id": "tea-1"},
                    ],
                }
            ],
        )

        content = build_list_message(request)

        assert content["buttonText"] == "Open"
        assert content["title"] == "Menu"
        assert content["footer"] == "Thanks"
        assert content["sections"][0]["rows"] == [
            {"title": "Coffee", "description": "Hot", "rowId": "Coffee"},
            {"title": "Tea", "description": "", "rowId": "tea-1"},
        ]

    def test_default_button_text(self):
        request = ListMessageRequest(
            jid="111", text="Menu", sections=[{"title": "S", "rows": [{"title": "A"}]}]
        )

        assert build_list_message(request)["buttonText"] == DEFAULT_LIST_BUTTON_TEXT

    def test_section_row_limit(self):
        with pytest.raises(ValidationError):
            ListMessageRequest(
                jid="111",
                text="Menu",
                sections=[{"title": "S", "rows": [{"title": str(i)} for i in range(11)]}],
            )


class TestTemplateButtonsMessage:
    def test_each_button_kind_with_one_based_index(self):
        request = TemplateButtonsMessageRequest(
            jid="111",
            text="Contact us",
            buttons=[
                {"type": "url", "text": "Site", "url": "https://example.com"},
                {"type": "call", "text": "Call", "phoneNumber": "+5215512345678"},
                {"type": "reply", "text": "Later"},
            ],
        )

        content = build_template_buttons_message(request)

        assert content["templateButtons"] == [
            {"index": 1, "urlButton": {"displayText": "Site", "url": "https://example.com"}},
            {
                "index": 2,
                "callButton": {"displayText": "Call", "phoneNumber": "+5215512345678"},
            },
            {"index": 3, "quickReplyButton": {"displayText": "Later", "id": "btn_2"}},
        ]

    def test_unknown_button_type_rejected(self):
        with pytest.raises(ValidationError):
            TemplateButtonsMessageRequest(
                jid="111", text="x", buttons=[{"type": "email", "text": "Mail"}]
            )


class TestLinkMessage:
    def test_plain_link_appends_url(self):
        request = LinkMessageRequest(jid="111", text="Read this", url="https://example.com/a")

        assert build_link_message(request) == {"text": "Read this\n\nhttps://example.com/a"}

    def test_custom_preview_marks_matched_text(self):
        request = LinkMessageRequest(
            jid="111", text="Read", url="https://example.com/a", title="Example"
        )

        content = build_link_message(request)

        assert content["matchedText"] == "https://example.com/a"

    def test_invalid_url_rejected(self):
        with pytest.raises(ValidationError):
            LinkMessageRequest(jid="111", text="Read", url="not a url")

    def test_url_without_scheme_keeps_spelling(self):
        request = LinkMessageRequest(jid="111", text="Read", url="www.example.com/page")

        assert request.url == "www.example.com/page"

    @pytest.mark.parametrize("url", ["http://intranet", "mailto://example.com"])
    def test_url_needs_known_scheme_and_tld(self, url):
        with pytest.raises(ValidationError):
            LinkMessageRequest(jid="111", text="Read", url=url)


class TestDeleteMessages:
    def test_delete_for_everyone_wraps_key(self):
        key = {"remoteJid": "111@s.whatsapp.net", "fromMe": True, "id": "ABC"}

        assert build_delete_message(key) == {"delete": key}

    def test_clear_for_me_modification(self):
        request = DeleteForMeRequest(
            jid="111@s.whatsapp.net",
            message={"id": "ABC", "fromMe": False, "timestamp": "1654823909"},
        )

        assert build_clear_for_me_modification(request) == {
            "clear": True,
            "lastMessages": [
                {
                    "key": {"remoteJid": "111@s.whatsapp.net", "id": "ABC", "fromMe": False},
                    "messageTimestamp": 1654823909,
                }
            ],
        }

    def test_numeric_timestamp_accepted(self):
        request = DeleteForMeRequest(
            jid="111", message={"id": "ABC", "fromMe": True, "timestamp": 1654823909}
        )

        assert request.message.timestamp == "1654823909"

    def test_non_numeric_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            DeleteForMeRequest(
                jid="111", message={"id": "ABC", "fromMe": True, "timestamp": "yesterday"}
            )
