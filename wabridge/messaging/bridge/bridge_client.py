"""
HTTP client for the Baileys bridge sidecar.

The WhatsApp protocol runs inside a sidecar process that hosts the client
library and exposes its session operations over HTTP. This module implements
IMessagingClient on top of that API.

Key Design Decisions:
- Pure dependency injection (the aiohttp session is owned by the app lifespan)
- One URL builder for all session-scoped endpoints
- HTTP failures surface as MessagingClientError with status and body
"""

from typing import Any
from urllib.parse import quote

import aiohttp

from wabridge.core.config.settings import settings
from wabridge.core.logging.logger import get_logger
from wabridge.domain.enums import RecipientKind, WAPresence
from wabridge.domain.interfaces.messaging_interface import (
    IMessagingClient,
    MessagingClientError,
)


class BridgeUrlBuilder:
    """Builds URLs for the bridge's session-scoped endpoints."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def session_url(self, session_id: str, endpoint: str = "") -> str:
        url = f"{self.base_url}/sessions/{quote(session_id, safe='')}"
        if endpoint:
            url = f"{url}/{endpoint.lstrip('/')}"
        return url


class BaileysBridgeClient(IMessagingClient):
    """
    Messaging client backed by the bridge sidecar.

    Endpoints used:
    - GET  /sessions/{id}                     -> 200 if active, 404 otherwise
    - POST /sessions/{id}/recipients/resolve  -> {"jid": str | null}
    - POST /sessions/{id}/presence            -> 2xx
    - POST /sessions/{id}/messages            -> message info
    - POST /sessions/{id}/chats/modify        -> modification result
    - POST /sessions/{id}/media/download      -> raw bytes
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str = settings.bridge_url,
        api_key: str | None = settings.bridge_api_key,
        logger: Any | None = None,
    ):
        """Initialize bridge client with dependency injection.

        Args:
            session: Persistent aiohttp session (managed by FastAPI lifespan)
            base_url: Bridge base URL
            api_key: Optional bearer token expected by the bridge
            logger: Pre-configured logger instance
        """
        self.session = session
        self.api_key = api_key
        self.logger = logger or get_logger(__name__)
        self.url_builder = BridgeUrlBuilder(base_url)

        self.logger.info(f"Bridge client initialized for {self.url_builder.base_url}")

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _raise_for_status(self, response: aiohttp.ClientResponse, url: str) -> None:
        if response.status < 400:
            return
        try:
            error_text = await response.text()
        except Exception:
            error_text = "Error reading response"

        if response.status == 401:
            self.logger.error(f"Bridge rejected credentials (401) for {url}")
        else:
            self.logger.error(f"Bridge HTTP error {response.status} for {url}: {error_text}")
        raise MessagingClientError(
            f"Bridge request failed with status {response.status}: {error_text}",
            status=response.status,
            body=error_text,
        )

    async def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """POST a JSON payload to the bridge and return the decoded JSON response.

        Raises:
            MessagingClientError: For HTTP errors and connection failures
        """
        self.logger.debug(f"POST {url} payload: {payload}")

        try:
            async with self.session.post(
                url, headers=self._get_headers(), json=payload
            ) as response:
                await self._raise_for_status(response, url)
                if response.content_length == 0:
                    return None
                response_data = await response.json(content_type=None)
                self.logger.debug(f"Response: {response_data}")
                return response_data
        except aiohttp.ClientError as err:
            self.logger.error(f"Bridge connection error for {url}: {err}")
            raise MessagingClientError(f"Bridge connection error: {err}") from err

    async def has_session(self, session_id: str) -> bool:
        url = self.url_builder.session_url(session_id)
        try:
            async with self.session.get(url, headers=self._get_headers()) as response:
                if response.status == 404:
                    return False
                await self._raise_for_status(response, url)
                return True
        except aiohttp.ClientError as err:
            self.logger.error(f"Bridge connection error for {url}: {err}")
            raise MessagingClientError(f"Bridge connection error: {err}") from err

    async def resolve_recipient(
        self, session_id: str, jid: str, kind: RecipientKind
    ) -> str | None:
        data = await self.post_json(
            self.url_builder.session_url(session_id, "recipients/resolve"),
            {"jid": jid, "type": RecipientKind(kind).value},
        )
        if not data:
            return None
        return data.get("jid")

    async def update_presence(
        self, session_id: str, presence: WAPresence, jid: str
    ) -> None:
        await self.post_json(
            self.url_builder.session_url(session_id, "presence"),
            {"jid": jid, "presence": WAPresence(presence).value},
        )

    async def send_message(
        self,
        session_id: str,
        jid: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        payload: dict[str, Any] = {"jid": jid, "message": content}
        if options:
            payload["options"] = options
        return await self.post_json(
            self.url_builder.session_url(session_id, "messages"), payload
        )

    async def chat_modify(
        self, session_id: str, modification: dict[str, Any], jid: str
    ) -> dict[str, Any] | None:
        return await self.post_json(
            self.url_builder.session_url(session_id, "chats/modify"),
            {"jid": jid, "modification": modification},
        )

    async def download_media(self, session_id: str, message: dict[str, Any]) -> bytes:
        url = self.url_builder.session_url(session_id, "media/download")
        try:
            async with self.session.post(
                url, headers=self._get_headers(), json={"message": message}
            ) as response:
                await self._raise_for_status(response, url)
                return await response.read()
        except aiohttp.ClientError as err:
            self.logger.error(f"Bridge connection error for {url}: {err}")
            raise MessagingClientError(f"Bridge connection error: {err}") from err
