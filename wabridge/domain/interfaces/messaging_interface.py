"""
Messaging client interface.

The WhatsApp protocol (binary framing, encryption, multi-device sync) lives
entirely inside an external client library. This interface is the seam the
gateway talks through, so the dispatcher and the routes can be exercised
against a fake without a real protocol stack.

Implements operations:
- Session lookup (has_session)
- Recipient resolution (resolve_recipient)
- Presence (update_presence)
- Messaging (send_message, chat_modify)
- Media (download_media)
"""

from abc import ABC, abstractmethod
from typing import Any

from wabridge.domain.enums import RecipientKind, WAPresence


class IMessagingClient(ABC):
    """
    Messaging client capability keyed by session identifier.

    Key Design Decisions:
    - Every call names the session it runs against; the client owns the
      session objects themselves
    - Resolution returns the normalised jid, or None when the account or
      group does not exist
    - Send results are returned as the client reports them (opaque dicts)
    """

    @abstractmethod
    async def has_session(self, session_id: str) -> bool:
        """Check whether an authenticated session with this ID is active.

        Args:
            session_id: Messaging session identifier

        Returns:
            True if the session exists and can be used
        """
        pass

    @abstractmethod
    async def resolve_recipient(
        self, session_id: str, jid: str, kind: RecipientKind
    ) -> str | None:
        """Resolve a recipient identifier into a usable jid.

        Args:
            session_id: Messaging session identifier
            jid: Phone number, user jid or group jid as given by the caller
            kind: Whether to resolve as an individual account or a group

        Returns:
            Normalised jid, or None if the recipient does not exist
        """
        pass

    async def jid_exists(
        self, session_id: str, jid: str, kind: RecipientKind
    ) -> bool:
        """Check that a recipient exists without caring about its normal form."""
        return await self.resolve_recipient(session_id, jid, kind) is not None

    @abstractmethod
    async def update_presence(
        self, session_id: str, presence: WAPresence, jid: str
    ) -> None:
        """Send a presence update addressed to a recipient.

        Raises:
            MessagingClientError: If the client rejects the update
        """
        pass

    @abstractmethod
    async def send_message(
        self,
        session_id: str,
        jid: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Send a message.

        Args:
            session_id: Messaging session identifier
            jid: Resolved recipient jid
            content: Message content in the client's format
            options: Client send options (quoted message, ephemeral, ...)

        Returns:
            Message info reported by the client

        Raises:
            MessagingClientError: If the send fails
        """
        pass

    @abstractmethod
    async def chat_modify(
        self, session_id: str, modification: dict[str, Any], jid: str
    ) -> dict[str, Any] | None:
        """Apply a chat modification (clear, archive, delete for me, ...)."""
        pass

    @abstractmethod
    async def download_media(self, session_id: str, message: dict[str, Any]) -> bytes:
        """Download and decrypt the media attached to a received message.

        Args:
            session_id: Messaging session identifier
            message: Full message info as received from the client

        Returns:
            Raw media bytes
        """
        pass


class MessagingClientError(Exception):
    """Raised when the messaging client rejects or fails an operation."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status = status
        self.body = body
