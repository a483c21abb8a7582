"""
Interactive message models for the messages API.

Supports four kinds of rich messages:
1. Button Messages - legacy quick reply buttons (max 3)
2. List Messages - sectioned lists (max 10 rows per section)
3. Template Button Messages - url / call / quick reply buttons (max 3)
4. Link Messages - text with a link preview
"""

import re
from enum import Enum

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    IPvAnyAddress,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from .basic_models import RecipientMessage

_any_url = TypeAdapter(AnyUrl)
_ip_address = TypeAdapter(IPvAnyAddress)

LINK_SCHEMES = frozenset({"http", "https", "ftp"})
_TLD = re.compile(r"^([a-z\u00a1-\uffff]{2,}|xn--[a-z0-9-]+)$", re.IGNORECASE)


def _has_public_host(host: str) -> bool:
    try:
        _ip_address.validate_python(host.strip("[]"))
        return True
    except ValidationError:
        pass
    labels = host.rstrip(".").split(".")
    return len(labels) > 1 and bool(_TLD.match(labels[-1]))


class TemplateButtonType(Enum):
    """Supported template button kinds."""

    URL = "url"
    CALL = "call"
    REPLY = "reply"


class ReplyButton(BaseModel):
    """Quick reply button."""

    text: str = Field(..., min_length=1, description="Button display text")
    id: str | None = Field(None, description="Button identifier (defaults to btn_<index>)")


class ButtonMessageRequest(RecipientMessage):
    """Schema for POST /send/buttons."""

    text: str = Field(..., min_length=1)
    footer: str | None = None
    buttons: list[ReplyButton] = Field(..., min_length=1, max_length=3)


class ListRow(BaseModel):
    """Row inside a list section."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    id: str | None = Field(None, description="Row identifier (defaults to the title)")


class ListSection(BaseModel):
    """Section for list messages."""

    title: str = Field(..., min_length=1)
    rows: list[ListRow] = Field(..., min_length=1, max_length=10)


class ListMessageRequest(RecipientMessage):
    """Schema for POST /send/list."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=1)
    footer: str | None = None
    button_text: str | None = Field(None, alias="buttonText")
    sections: list[ListSection] = Field(..., min_length=1)


class TemplateButton(BaseModel):
    """Template button: opens a URL, starts a call, or replies."""

    model_config = ConfigDict(populate_by_name=True)

    type: TemplateButtonType
    text: str = Field(..., min_length=1)
    url: str | None = None
    phone_number: str | None = Field(None, alias="phoneNumber")
    id: str | None = None


class TemplateButtonsMessageRequest(RecipientMessage):
    """Schema for POST /send/template-buttons."""

    text: str = Field(..., min_length=1)
    footer: str | None = None
    buttons: list[TemplateButton] = Field(..., min_length=1, max_length=3)


class LinkMessageRequest(RecipientMessage):
    """Schema for POST /send/link."""

    text: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    title: str | None = None
    description: str | None = None
    thumbnail: str | None = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Accept http, https and ftp URLs; the scheme may be omitted.

        The host must be an IP address or carry a top-level domain. The
        caller's spelling is kept.
        """
        candidate = v.strip()
        if "://" not in candidate:
            candidate = f"http://{candidate}"
        try:
            url = _any_url.validate_python(candidate)
        except ValidationError as e:
            raise ValueError("url must be a valid URL") from e
        if url.scheme not in LINK_SCHEMES:
            raise ValueError("url scheme must be http, https or ftp")
        if not url.host or not _has_public_host(url.host):
            raise ValueError("url host must include a top-level domain")
        return v
