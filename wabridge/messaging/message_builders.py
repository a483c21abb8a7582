"""
Message content builders.

Turn validated API request models into the content dicts the messaging
client sends. Pure functions, no I/O.
"""

from typing import Any

from wabridge.messaging.models.basic_models import DeleteForMeRequest
from wabridge.messaging.models.interactive_models import (
    ButtonMessageRequest,
    LinkMessageRequest,
    ListMessageRequest,
    TemplateButtonsMessageRequest,
    TemplateButtonType,
)

DEFAULT_LIST_BUTTON_TEXT = "Ver opciones"


def _default_button_id(index: int) -> str:
    return f"btn_{index}"


def build_button_message(request: ButtonMessageRequest) -> dict[str, Any]:
    """Build a legacy quick reply buttons message."""
    return {
        "text": request.text,
        "footer": request.footer or "",
        "buttons": [
            {
                "buttonId": button.id or _default_button_id(index),
                "buttonText": {"displayText": button.text},
                "type": 1,
            }
            for index, button in enumerate(request.buttons)
        ],
        "headerType": 1,
    }


def build_list_message(request: ListMessageRequest) -> dict[str, Any]:
    """Build a sectioned list message. Rows without an id use their title."""
    return {
        "text": request.text,
        "footer": request.footer or "",
        "title": request.text,
        "buttonText": request.button_text or DEFAULT_LIST_BUTTON_TEXT,
        "sections": [
            {
                "title": section.title,
                "rows": [
                    {
                        "title": row.title,
                        "description": row.description or "",
                        "rowId": row.id or row.title,
                    }
                    for row in section.rows
                ],
            }
            for section in request.sections
        ],
    }


def build_template_buttons_message(
    request: TemplateButtonsMessageRequest,
) -> dict[str, Any]:
    """Build a template buttons message (url, call and quick reply buttons).

    Template button indexes are 1-based.
    """
    template_buttons = []
    for index, button in enumerate(request.buttons):
        if button.type == TemplateButtonType.URL:
            entry = {"urlButton": {"displayText": button.text, "url": button.url}}
        elif button.type == TemplateButtonType.CALL:
            entry = {
                "callButton": {
                    "displayText": button.text,
                    "phoneNumber": button.phone_number,
                }
            }
        else:
            entry = {
                "quickReplyButton": {
                    "displayText": button.text,
                    "id": button.id or _default_button_id(index),
                }
            }
        template_buttons.append({"index": index + 1, **entry})

    return {
        "text": request.text,
        "footer": request.footer or "",
        "templateButtons": template_buttons,
    }


def build_link_message(request: LinkMessageRequest) -> dict[str, Any]:
    """Build a text message carrying a link.

    Without title or description the client generates the preview on its own;
    otherwise the URL is marked as the matched text for a custom preview.
    """
    content: dict[str, Any] = {"text": f"{request.text}\n\n{request.url}"}
    if request.title or request.description:
        content["matchedText"] = request.url
    return content


def build_delete_message(key: dict[str, Any]) -> dict[str, Any]:
    """Build the content that deletes a message for everyone."""
    return {"delete": key}


def build_clear_for_me_modification(request: DeleteForMeRequest) -> dict[str, Any]:
    """Build the chat modification that clears one message on this device."""
    return {
        "clear": True,
        "lastMessages": [
            {
                "key": {
                    "remoteJid": request.jid,
                    "id": request.message.id,
                    "fromMe": request.message.fromMe,
                },
                "messageTimestamp": int(request.message.timestamp),
            }
        ],
    }
